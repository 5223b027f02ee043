# tests/test_task_store.py

import uuid

import pytest

from apps.board.models import Task
from apps.board.task_store import task_store
from apps.core.exceptions import NotFound, ValidationError

pytestmark = pytest.mark.django_db


ANEXO = {
    'filename': '1717171717171-1.pdf',
    'originalName': 'roadmap.pdf',
    'url': 'http://testserver/media/attachments/1717171717171-1.pdf',
    'mimetype': 'application/pdf',
    'size': 1024,
}


def test_create_aplica_defaults(criar_conta):
    conta = criar_conta()

    task = task_store.create(conta.pk, {'title': '  Escrever testes  '})

    assert task.owner_id == conta.pk
    assert task.title == 'Escrever testes'
    assert task.description == ''
    assert task.priority == 'medium'
    assert task.category == 'feature'
    assert task.column == 'todo'
    assert task.attachments == []
    assert task.created_at is not None
    assert task.updated_at is not None


def test_create_ignora_owner_e_id_do_payload(criar_conta):
    conta = criar_conta()
    outra = criar_conta('bruno')
    id_forjado = str(uuid.uuid4())

    task = task_store.create(conta.pk, {'title': 'x', 'owner': outra.pk, 'userId': outra.pk, 'id': id_forjado})

    assert task.owner_id == conta.pk
    assert str(task.pk) != id_forjado


@pytest.mark.parametrize('campos', [
    {},
    {'title': '   '},
    {'title': 'x' * 201},
    {'title': 'ok', 'description': 'd' * 2001},
    {'title': 'ok', 'priority': 'urgent'},
    {'title': 'ok', 'category': 'chore'},
    {'title': 'ok', 'column': 'backlog'},
    {'title': 'ok', 'order': 'primeiro'},
    {'title': 'ok', 'attachments': [{'filename': 'a'}]},
    {'title': 'ok', 'attachments': [dict(ANEXO, size=-1)]},
    {'title': 42},
])
def test_create_rejeita_campos_invalidos(criar_conta, campos):
    conta = criar_conta()

    with pytest.raises(ValidationError):
        task_store.create(conta.pk, campos)

    assert Task.objects.count() == 0


def test_create_rejeita_payload_que_nao_e_objeto(criar_conta):
    conta = criar_conta()

    with pytest.raises(ValidationError):
        task_store.create(conta.pk, ['title'])


def test_create_aceita_anexos_validos(criar_conta):
    conta = criar_conta()

    task = task_store.create(conta.pk, {'title': 'Com anexo', 'attachments': [ANEXO]})

    assert task.attachments == [ANEXO]
    assert task.to_dict()['attachments'] == [ANEXO]


def test_list_ordena_por_coluna_e_order(criar_conta, criar_tarefa):
    conta = criar_conta()
    criar_tarefa(conta, title='feito', column='done', order=0)
    criar_tarefa(conta, title='b', column='todo', order=2)
    criar_tarefa(conta, title='a', column='todo', order=1)
    criar_tarefa(conta, title='andando', column='inprogress', order=0)

    titulos = [task.title for task in task_store.list(conta.pk)]

    assert titulos == ['a', 'b', 'andando', 'feito']


def test_list_isola_contas(criar_conta, criar_tarefa):
    ana = criar_conta('ana')
    bruno = criar_conta('bruno')
    criar_tarefa(ana, title='da ana')
    criar_tarefa(bruno, title='do bruno')

    assert [task.title for task in task_store.list(ana.pk)] == ['da ana']
    assert [task.title for task in task_store.list(bruno.pk)] == ['do bruno']


def test_update_mescla_campos(criar_conta, criar_tarefa):
    conta = criar_conta()
    task = criar_tarefa(conta, title='Original', description='mantida', priority='low')
    criado_em = task.created_at

    atualizada = task_store.update(conta.pk, task.pk, {'title': 'Novo título', 'priority': 'high'})

    assert atualizada.title == 'Novo título'
    assert atualizada.priority == 'high'
    assert atualizada.description == 'mantida'
    assert atualizada.created_at == criado_em
    assert atualizada.updated_at >= criado_em


def test_update_invalido_nao_altera_nada(criar_conta, criar_tarefa):
    conta = criar_conta()
    task = criar_tarefa(conta, title='Original')

    with pytest.raises(ValidationError):
        task_store.update(conta.pk, task.pk, {'title': 'Outro', 'column': 'archive'})

    task.refresh_from_db()
    assert task.title == 'Original'
    assert task.column == 'todo'


def test_update_de_outra_conta_e_not_found(criar_conta, criar_tarefa):
    ana = criar_conta('ana')
    bruno = criar_conta('bruno')
    task = criar_tarefa(ana, title='da ana')

    with pytest.raises(NotFound):
        task_store.update(bruno.pk, task.pk, {'title': 'invadido'})

    task.refresh_from_db()
    assert task.title == 'da ana'


@pytest.mark.parametrize('task_id', [None, '', 'nao-e-uuid', 123])
def test_id_malformado_e_not_found(criar_conta, task_id):
    conta = criar_conta()

    with pytest.raises(NotFound):
        task_store.update(conta.pk, task_id, {'title': 'x'})


def test_move_define_coluna_e_ordem(criar_conta, criar_tarefa):
    conta = criar_conta()
    task = criar_tarefa(conta, title='mover', column='todo', order=3)

    movida = task_store.move(conta.pk, task.pk, 'done', 0)

    assert movida.column == 'done'
    assert movida.order == 0
    assert movida.previous_column == 'todo'

    task.refresh_from_db()
    assert task.column == 'done'


def test_move_para_mesma_coluna_so_reordena(criar_conta, criar_tarefa):
    conta = criar_conta()
    task = criar_tarefa(conta, title='fica', column='inprogress', order=0)

    movida = task_store.move(conta.pk, task.pk, 'inprogress', 4)

    assert movida.column == 'inprogress'
    assert movida.previous_column == 'inprogress'
    assert movida.order == 4


@pytest.mark.parametrize('coluna, ordem', [
    ('backlog', 0),
    ('done', 'fim'),
    ('done', None),
    ('done', True),
])
def test_move_invalido(criar_conta, criar_tarefa, coluna, ordem):
    conta = criar_conta()
    task = criar_tarefa(conta, title='parada')

    with pytest.raises(ValidationError):
        task_store.move(conta.pk, task.pk, coluna, ordem)

    task.refresh_from_db()
    assert task.column == 'todo'


def test_delete_remove_e_devolve_tarefa(criar_conta, criar_tarefa):
    conta = criar_conta()
    task = criar_tarefa(conta, title='tchau')

    removida = task_store.delete(conta.pk, task.pk)

    assert removida.pk == task.pk
    assert not Task.objects.filter(pk=task.pk).exists()

    with pytest.raises(NotFound):
        task_store.delete(conta.pk, task.pk)


def test_delete_de_outra_conta_e_not_found(criar_conta, criar_tarefa):
    ana = criar_conta('ana')
    bruno = criar_conta('bruno')
    task = criar_tarefa(ana)

    with pytest.raises(NotFound):
        task_store.delete(bruno.pk, task.pk)

    assert Task.objects.filter(pk=task.pk).exists()


def test_remover_conta_remove_tarefas(criar_conta, criar_tarefa):
    conta = criar_conta()
    criar_tarefa(conta)
    criar_tarefa(conta)

    conta.delete()

    assert Task.objects.count() == 0


def test_get_escopado_pela_conta(criar_conta, criar_tarefa):
    ana = criar_conta('ana')
    bruno = criar_conta('bruno')
    task = criar_tarefa(ana, title='da ana')

    assert task_store.get(ana.pk, task.pk) == task

    with pytest.raises(NotFound):
        task_store.get(bruno.pk, task.pk)

    with pytest.raises(NotFound):
        task_store.get(ana.pk, 'nao-e-uuid')


@pytest.mark.parametrize('ordem', [float('inf'), float('-inf'), float('nan'), 1e400, 10 ** 400])
def test_order_precisa_ser_finito(criar_conta, criar_tarefa, ordem):
    conta = criar_conta()
    task = criar_tarefa(conta, title='parada', order=1)

    with pytest.raises(ValidationError) as exc:
        task_store.create(conta.pk, {'title': 'infinita', 'order': ordem})
    assert exc.value.errors == {'order': ['Must be a finite number.']}

    with pytest.raises(ValidationError):
        task_store.update(conta.pk, task.pk, {'order': ordem})

    with pytest.raises(ValidationError) as exc:
        task_store.move(conta.pk, task.pk, 'done', ordem)
    assert 'destinationIndex' in exc.value.errors

    task.refresh_from_db()
    assert task.order == 1
    assert task.column == 'todo'
    assert Task.objects.count() == 1
