# apps/core/views.py

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from .auth_service import auth_service  # Importando nosso serviço encapsulado
from .exceptions import BoardError
from .permissions import requer_token
from .utils import ler_json


@csrf_exempt
@require_POST
def registro_view(request):
    """
    Registro de nova conta - devolve token + resumo da conta

    Toda validação e criação fica no serviço encapsulado
    """
    try:
        dados = ler_json(request)
        usuario, token = auth_service.register(dados)
    except BoardError as e:
        return JsonResponse(e.as_dict(), status=e.status_code)

    return JsonResponse({'token': token, 'user': usuario.resumo()}, status=201)


@csrf_exempt
@require_POST
def login_view(request):
    """
    Login por email ou username - devolve token + resumo da conta
    """
    try:
        dados = ler_json(request)
        identificador = dados.get('email') or dados.get('username') or ''
        usuario, token = auth_service.login(identificador, dados.get('password') or '')
    except BoardError as e:
        return JsonResponse(e.as_dict(), status=e.status_code)

    return JsonResponse({'token': token, 'user': usuario.resumo()})


@require_GET
@requer_token
def me_view(request):
    """Conta dona do token"""
    return JsonResponse({'user': request.user.resumo()})


@require_GET
def health_check(request):
    """
    Health check para monitoramento
    Inclui quantas conexões de sincronização este processo mantém
    """
    from apps.board.registry import connection_registry

    return JsonResponse({
        'status': 'ok',
        'connectedClients': connection_registry.count(),
    })
