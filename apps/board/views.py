# apps/board/views.py

import logging

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from apps.core.exceptions import UploadError
from apps.core.permissions import requer_token
from .forms import UploadAnexoForm
from .task_store import task_store
from .uploads import upload_relay

logger = logging.getLogger(__name__)


@require_GET
@requer_token
def listar_tarefas(request):
    """
    Snapshot das tarefas da conta via REST
    Equivalente ao evento sync:tasks do WebSocket
    """
    tasks = task_store.list(request.user.pk)
    return JsonResponse([task.to_dict() for task in tasks], safe=False)


@csrf_exempt
@require_POST
@requer_token
def upload_anexo(request):
    """
    Recebe um arquivo e devolve a referência de anexo
    {filename, originalName, url, mimetype, size}
    """
    form = UploadAnexoForm(request.POST, request.FILES)
    if not form.is_valid():
        mensagem = form.errors.get('file', ['No file uploaded'])[0]
        return JsonResponse({'error': mensagem}, status=400)

    try:
        anexo = upload_relay.store(form.cleaned_data['file'], build_url=request.build_absolute_uri)
    except UploadError as e:
        logger.info(f"🚫 Upload rejeitado para {request.user.username}: {e.message}")
        return JsonResponse(e.as_dict(), status=e.status_code)

    return JsonResponse(anexo)
