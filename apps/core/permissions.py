# apps/core/permissions.py

import logging
from functools import wraps

from django.http import JsonResponse

from .auth_service import auth_service
from .exceptions import AuthError
from .utils import extrair_bearer_token

logger = logging.getLogger(__name__)


def requer_token(view_func):
    """
    Decorador que exige token de sessão no header Authorization

    Resolve a conta e injeta em request.user. Qualquer AuthError
    vira 401 antes da view tocar em dados.
    """

    @wraps(view_func)
    def wrapped_view(request, *args, **kwargs):
        token = extrair_bearer_token(request.headers.get('Authorization'))

        try:
            request.user = auth_service.verify_token(token)
        except AuthError as e:
            logger.info(f"🚫 Request rejeitada ({e.code}): {request.path}")
            return JsonResponse(e.as_dict(), status=e.status_code)

        return view_func(request, *args, **kwargs)

    return wrapped_view
