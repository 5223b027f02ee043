# apps/board/protocol.py

"""
Eventos trocados no canal de sincronização

Cada frame é um JSON de texto: {"event": <nome>, "data": <payload>}
"""

import json

# Cliente -> servidor
TASK_CREATE = 'task:create'
TASK_UPDATE = 'task:update'
TASK_MOVE = 'task:move'
TASK_DELETE = 'task:delete'
SYNC_REQUEST = 'sync:request'
PING = 'ping'

# Servidor -> cliente
SYNC_TASKS = 'sync:tasks'
TASK_CREATED = 'task:created'
TASK_UPDATED = 'task:updated'
TASK_MOVED = 'task:moved'
TASK_DELETED = 'task:deleted'
ERROR = 'error'
PONG = 'pong'


def account_group_name(account_id) -> str:
    """Grupo de broadcast (sala) de uma conta"""
    return f'tasks_account_{account_id}'


def frame(event: str, data=None) -> dict:
    return {'event': event, 'data': data}


def encode_frame(event: str, data=None) -> str:
    return json.dumps(frame(event, data), allow_nan=False)
