# tests/test_registry.py

import pytest

from apps.board.protocol import account_group_name, encode_frame
from apps.board.registry import ConnectionRegistry


def test_add_e_discard():
    registry = ConnectionRegistry()

    registry.add(1, 'canal-a')
    registry.add(1, 'canal-b')
    registry.add(2, 'canal-c')

    assert registry.connections(1) == {'canal-a', 'canal-b'}
    assert registry.count() == 3

    registry.discard(1, 'canal-a')
    assert registry.connections(1) == {'canal-b'}


def test_discard_e_idempotente():
    registry = ConnectionRegistry()
    registry.add(1, 'canal-a')

    registry.discard(1, 'canal-a')
    registry.discard(1, 'canal-a')
    registry.discard(99, 'nunca-existiu')

    assert registry.connections(1) == set()
    assert registry.count() == 0


def test_connections_devolve_copia():
    registry = ConnectionRegistry()
    registry.add(1, 'canal-a')

    registry.connections(1).add('intruso')

    assert registry.connections(1) == {'canal-a'}


def test_grupo_por_conta():
    assert account_group_name(7) == 'tasks_account_7'
    assert account_group_name(7) != account_group_name(8)


def test_frame_codificado():
    assert encode_frame('sync:tasks', []) == '{"event": "sync:tasks", "data": []}'


def test_frame_nao_aceita_numero_nao_finito():
    with pytest.raises(ValueError):
        encode_frame('sync:tasks', [{'order': float('inf')}])
