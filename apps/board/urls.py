# apps/board/urls.py

from django.urls import path
from . import views

app_name = 'board'

urlpatterns = [
    # Snapshot REST (fallback do sync:tasks)
    path('api/tasks', views.listar_tarefas, name='listar_tarefas'),

    # Upload de anexos
    path('api/upload', views.upload_anexo, name='upload_anexo'),
]
