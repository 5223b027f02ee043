# apps/board/client.py

"""
Lado cliente do protocolo de sincronização

TaskCache é o espelho em memória das tarefas da conta. Ele não tem
autoridade nenhuma: o próximo snapshot do servidor sempre substitui o
que estiver aqui, inclusive palpites otimistas.

BoardClient transforma ações do usuário em intenções no canal e
aplica os eventos recebidos no cache. Nenhuma ação espera resposta:
o resultado chega depois, como evento.
"""

import copy
import logging
from typing import Callable, Dict, Iterable, List, Optional

from . import protocol

logger = logging.getLogger(__name__)

ORDEM_COLUNAS = ('todo', 'inprogress', 'done')


def _chave_ordenacao(task: Dict):
    coluna = task.get('column')
    posicao = ORDEM_COLUNAS.index(coluna) if coluna in ORDEM_COLUNAS else len(ORDEM_COLUNAS)
    return posicao, task.get('order') or 0


class TaskCache:
    """Espelho local das tarefas, organizado por coluna"""

    def __init__(self):
        self._tasks: Dict[str, Dict] = {}
        self.is_loading = True
        self.error: Optional[str] = None

    @property
    def tasks(self) -> List[Dict]:
        """Tarefas ordenadas por coluna e depois por order (estável)"""
        return sorted(self._tasks.values(), key=_chave_ordenacao)

    def get(self, task_id) -> Optional[Dict]:
        return self._tasks.get(str(task_id))

    def by_column(self, column: str) -> List[Dict]:
        return [task for task in self.tasks if task.get('column') == column]

    def task_counts(self) -> Dict[str, int]:
        """Contagem por coluna (usada pelo gráfico de progresso)"""
        counts = {coluna: 0 for coluna in ORDEM_COLUNAS}
        for task in self._tasks.values():
            if task.get('column') in counts:
                counts[task['column']] += 1
        counts['total'] = len(self._tasks)
        return counts

    def __len__(self):
        return len(self._tasks)

    def __contains__(self, task_id):
        return str(task_id) in self._tasks

    # === Eventos autoritativos ===

    def apply_snapshot(self, tasks: Iterable[Dict]):
        """Substitui tudo - idempotente"""
        self._tasks = {str(task['id']): copy.deepcopy(task) for task in tasks}
        self.is_loading = False
        self.error = None

    def apply_created(self, task: Dict):
        # O evento de criação e o snapshot seguinte trazem a mesma tarefa
        if str(task['id']) in self._tasks:
            return
        self._tasks[str(task['id'])] = copy.deepcopy(task)

    def apply_updated(self, task: Dict):
        if str(task['id']) not in self._tasks:
            return
        self._tasks[str(task['id'])] = copy.deepcopy(task)

    def apply_deleted(self, task_id):
        self._tasks.pop(str(task_id), None)

    def apply_error(self, message: str):
        self.error = message
        self.is_loading = False

    # === Palpites locais ===

    def move_optimistic(self, task_id, destination_column: str):
        """
        Troca a coluna localmente antes da resposta do servidor

        Se o servidor rejeitar, o próximo snapshot desfaz a troca.
        """
        task = self._tasks.get(str(task_id))
        if task is not None:
            task['column'] = destination_column


class BoardClient:
    """
    Emissor de intenções + roteador de eventos para o cache

    `send` recebe o frame ({"event", "data"}) e deve apenas enfileirá-lo
    no transporte; nada aqui aguarda resposta.
    """

    def __init__(self, send: Callable[[Dict], None], cache: Optional[TaskCache] = None):
        self._send = send
        self.cache = cache if cache is not None else TaskCache()

        self._event_handlers = {
            protocol.SYNC_TASKS: self.cache.apply_snapshot,
            protocol.TASK_CREATED: self.cache.apply_created,
            protocol.TASK_UPDATED: self.cache.apply_updated,
            protocol.TASK_MOVED: lambda data: self.cache.apply_updated(data['task']),
            protocol.TASK_DELETED: lambda data: self.cache.apply_deleted(data['id']),
            protocol.ERROR: lambda data: self.cache.apply_error(data.get('message')),
        }

    # === Intenções ===

    def create_task(self, fields: Dict):
        self._emit(protocol.TASK_CREATE, dict(fields))

    def update_task(self, fields: Dict):
        self._emit(protocol.TASK_UPDATE, dict(fields))

    def delete_task(self, task_id):
        self._emit(protocol.TASK_DELETE, {'taskId': str(task_id)})

    def move_task(self, task_id, source_column, destination_column, source_index, destination_index):
        self.cache.move_optimistic(task_id, destination_column)
        self._emit(protocol.TASK_MOVE, {
            'taskId': str(task_id),
            'sourceColumn': source_column,
            'destinationColumn': destination_column,
            'sourceIndex': source_index,
            'destinationIndex': destination_index,
        })

    def request_sync(self):
        self._emit(protocol.SYNC_REQUEST)

    # === Eventos do servidor ===

    def handle_frame(self, frame: Dict):
        """Aplica um frame recebido no cache; eventos desconhecidos são ignorados"""
        event = frame.get('event')
        handler = self._event_handlers.get(event)
        if handler is None:
            logger.debug(f"Evento ignorado: {event}")
            return

        # sync:tasks traz lista; os demais eventos trazem objeto
        data = frame.get('data')
        tipo_esperado = list if event == protocol.SYNC_TASKS else dict
        if not isinstance(data, tipo_esperado):
            logger.warning(f"⚠️ Evento {event} com payload inválido ignorado")
            return
        handler(data)

    def _emit(self, event, data=None):
        self._send(protocol.frame(event, data))
