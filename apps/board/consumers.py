# apps/board/consumers.py

import asyncio
import json
import logging
from enum import Enum

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer
from django.conf import settings

from apps.core.auth_service import auth_service
from apps.core.exceptions import AuthError, BoardError, ValidationError
from apps.core.utils import get_timestamp
from . import protocol
from .registry import connection_registry
from .task_store import task_store

logger = logging.getLogger(__name__)

# Fechamento por falha de autenticação (faixa 4000-4999 é da aplicação)
CLOSE_CODE_AUTH_FAILED = 4401


class ConnectionState(Enum):
    CONNECTING = 'connecting'
    AUTHENTICATED = 'authenticated'
    ACTIVE = 'active'
    CLOSED = 'closed'


class TaskSyncConsumer(AsyncWebsocketConsumer):
    """
    Consumer WebSocket do canal de sincronização de tarefas

    Ciclo de vida de cada conexão:
    CONNECTING -> AUTHENTICATED -> ACTIVE -> CLOSED
    (ou CONNECTING -> CLOSED se o token não for válido)

    Funcionalidades:
    - Uma sala (grupo do channel layer) por conta
    - Snapshot completo na conexão e após cada mutação
    - Intenções de mutação sempre escopadas pela conta da conexão,
      nunca por ids de conta que venham no payload
    - Erros vão só para quem enviou a intenção
    """

    intent_handlers = {
        protocol.TASK_CREATE: 'handle_create',
        protocol.TASK_UPDATE: 'handle_update',
        protocol.TASK_MOVE: 'handle_move',
        protocol.TASK_DELETE: 'handle_delete',
        protocol.SYNC_REQUEST: 'handle_sync_request',
        protocol.PING: 'handle_ping',
    }

    async def connect(self):
        """
        Valida o token do handshake antes de entrar na sala da conta
        """
        self.state = ConnectionState.CONNECTING
        self.user = None
        self.account_id = None
        self.group_name = None

        try:
            self.user = await asyncio.wait_for(
                self.verify_token(self.scope.get('token')),
                timeout=settings.KANBAN_AUTH_TIMEOUT
            )
        except AuthError as e:
            await self.reject(e)
            return
        except asyncio.TimeoutError:
            await self.reject(AuthError('Authentication timed out', code='timeout'))
            return

        self.account_id = self.user.pk
        self.group_name = protocol.account_group_name(self.account_id)

        await self.accept()

        # Juntar ao grupo da conta
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        connection_registry.add(self.account_id, self.channel_name)
        self.state = ConnectionState.AUTHENTICATED

        snapshot = await self.get_snapshot()
        await self.emit(protocol.SYNC_TASKS, snapshot)
        self.state = ConnectionState.ACTIVE

        logger.info(f"✅ WebSocket conectado - {self.user.username} na sala {self.group_name}")

    async def disconnect(self, close_code):
        """
        Sai da sala imediatamente. Mutações já enviadas por esta conexão
        continuam e ainda são transmitidas para o resto da sala.
        """
        self.state = ConnectionState.CLOSED
        group_name = getattr(self, 'group_name', None)

        if group_name:
            await self.channel_layer.group_discard(group_name, self.channel_name)
            connection_registry.discard(self.account_id, self.channel_name)
            logger.info(f"🔌 WebSocket desconectado - {self.user.username} da sala {group_name}")

    async def receive(self, text_data=None, bytes_data=None):
        """
        Recebe intenções do cliente e despacha para o handler do evento
        """
        if self.state is not ConnectionState.ACTIVE:
            return

        try:
            mensagem = json.loads(text_data or '')
        except json.JSONDecodeError:
            logger.error(f"❌ JSON inválido recebido via WebSocket da conta {self.account_id}")
            await self.emit_error('Invalid message format')
            return

        if not isinstance(mensagem, dict):
            await self.emit_error('Invalid message format')
            return

        event = mensagem.get('event')
        handler_name = self.intent_handlers.get(event)
        if handler_name is None:
            await self.emit_error(f'Unknown event: {event}')
            return

        try:
            await getattr(self, handler_name)(mensagem.get('data'))
        except BoardError as e:
            logger.info(f"⚠️ {event} rejeitado para conta {self.account_id}: {e.message}")
            await self.emit_error(e.message)
        except Exception:
            logger.exception(f"❌ Erro no WebSocket receive ({event}) da conta {self.account_id}")
            await self.emit_error('Internal server error')

    # === Handlers das intenções ===

    async def handle_create(self, data):
        task = await self.apply_intent(task_store.create, self._payload(data))

        await self.broadcast(protocol.TASK_CREATED, task.to_dict())
        await self.broadcast_sync()

    async def handle_update(self, data):
        data = self._payload(data)
        campos = {campo: valor for campo, valor in data.items() if campo != 'id'}

        task = await self.apply_intent(task_store.update, data.get('id'), campos)

        await self.broadcast(protocol.TASK_UPDATED, task.to_dict())
        await self.broadcast_sync()

    async def handle_move(self, data):
        data = self._payload(data)
        destination_index = data.get('destinationIndex')

        # A ordem recebe o índice de destino cru, como o cliente arrastou
        task = await self.apply_intent(
            task_store.move,
            data.get('taskId'),
            data.get('destinationColumn'),
            destination_index
        )

        await self.broadcast(protocol.TASK_MOVED, {
            'task': task.to_dict(),
            'sourceColumn': task.previous_column,
            'destinationColumn': task.column,
            'sourceIndex': data.get('sourceIndex'),
            'destinationIndex': destination_index,
        })
        await self.broadcast_sync()

    async def handle_delete(self, data):
        # Aceita tanto {taskId} quanto o id puro
        if isinstance(data, str):
            task_id = data
        else:
            data = self._payload(data)
            task_id = data.get('taskId', data.get('id'))

        task = await self.apply_intent(task_store.delete, task_id)

        await self.broadcast(protocol.TASK_DELETED, {'id': str(task.pk)})
        await self.broadcast_sync()

    async def handle_sync_request(self, data):
        """Ressincronização sob demanda - só para quem pediu"""
        await self.emit(protocol.SYNC_TASKS, await self.get_snapshot())

    async def handle_ping(self, data):
        await self.emit(protocol.PONG, {
            'timestamp': get_timestamp(),
            'interval': settings.KANBAN_WS_HEARTBEAT_INTERVAL,
        })

    # === Handlers do channel layer ===

    async def task_broadcast(self, event):
        """
        Entrega um evento da sala para esta conexão

        Cada conexão tem seu próprio canal, então uma conexão lenta ou
        morta não atrasa a entrega para as outras.
        """
        if self.state is ConnectionState.CLOSED:
            return

        await self.emit(event['event'], event['data'])

    async def task_sync(self, event):
        """
        Aviso de que o estado da conta mudou

        Cada conexão relê o store ao receber o aviso, então o último
        sync:tasks entregue nunca é mais velho que a última mutação
        confirmada, mesmo que avisos de conexões diferentes se cruzem.
        """
        if self.state is ConnectionState.CLOSED:
            return

        await self.emit(protocol.SYNC_TASKS, await self.get_snapshot())

    # === Métodos auxiliares ===

    async def reject(self, erro: AuthError):
        """
        Fecha a conexão com erro sem nunca entrar na sala
        (aceita só para conseguir entregar o evento de erro)
        """
        logger.warning(f"❌ Conexão WebSocket rejeitada ({erro.code}): {erro.message}")
        self.state = ConnectionState.CLOSED

        await self.accept()
        await self.emit(protocol.ERROR, {'message': erro.message})
        await self.close(code=CLOSE_CODE_AUTH_FAILED)

    async def broadcast(self, event, data):
        await self.channel_layer.group_send(
            self.group_name,
            {
                'type': 'task.broadcast',
                'event': event,
                'data': data,
            }
        )

    async def broadcast_sync(self):
        await self.channel_layer.group_send(self.group_name, {'type': 'task.sync'})

    async def emit(self, event, data=None):
        await self.send(text_data=protocol.encode_frame(event, data))

    async def emit_error(self, message):
        await self.emit(protocol.ERROR, {'message': message})

    def _payload(self, data):
        if not isinstance(data, dict):
            raise ValidationError('Payload must be an object')
        return data

    @database_sync_to_async
    def verify_token(self, token):
        return auth_service.verify_token(token)

    @database_sync_to_async
    def get_snapshot(self):
        return [task.to_dict() for task in task_store.list(self.account_id)]

    @database_sync_to_async
    def apply_intent(self, operacao, *args):
        """Executa a operação do store escopada pela conta da conexão"""
        return operacao(self.account_id, *args)
