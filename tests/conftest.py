# tests/conftest.py

import pytest
from channels.layers import channel_layers
from django.core.cache import cache

from apps.board.registry import connection_registry
from apps.board.task_store import task_store
from apps.core.auth_service import auth_service
from apps.core.models import Usuario

SENHA_PADRAO = 'senha-forte-123'


@pytest.fixture(autouse=True)
def estado_limpo():
    """
    Cada teste começa sem conexões registradas, sem tentativas de
    login no cache e com um channel layer novo (ligado ao loop atual).
    """
    connection_registry.clear()
    cache.clear()
    channel_layers.backends = {}
    yield
    connection_registry.clear()
    channel_layers.backends = {}


@pytest.fixture()
def criar_conta():
    """Factory de contas: criar_conta('ana') -> Usuario"""

    def _criar(username='ana', email=None, password=SENHA_PADRAO):
        return Usuario.objects.create_user(
            username=username,
            email=email or f'{username}@example.com',
            password=password,
        )

    return _criar


@pytest.fixture()
def criar_tarefa():
    """Factory de tarefas já persistidas pelo Task Store"""

    def _criar(conta, **campos):
        campos.setdefault('title', 'Tarefa de teste')
        return task_store.create(conta.pk, campos)

    return _criar


@pytest.fixture()
def token_de():
    def _token(conta):
        return auth_service.issue_token(conta.pk)

    return _token
