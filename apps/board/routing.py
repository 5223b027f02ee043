# apps/board/routing.py

from django.urls import re_path
from . import consumers

# Rotas WebSocket para a aplicação board
websocket_urlpatterns = [
    # Canal de sincronização de tarefas - uma sala por conta
    re_path(r'ws/tasks/$', consumers.TaskSyncConsumer.as_asgi()),
]
