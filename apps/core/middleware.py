# apps/core/middleware.py

from channels.middleware import BaseMiddleware

from .utils import extrair_token_do_scope


class BearerTokenMiddleware(BaseMiddleware):
    """
    Middleware ASGI que coloca o token do handshake em scope['token']

    Não valida nada: a verificação acontece no connect() do consumer,
    que é quem decide entre aceitar a conexão ou fechá-la com erro
    antes de entrar em qualquer grupo.
    """

    async def __call__(self, scope, receive, send):
        scope = dict(scope)
        scope['token'] = extrair_token_do_scope(scope)
        return await super().__call__(scope, receive, send)


def BearerTokenMiddlewareStack(inner):
    """Equivalente ao AuthMiddlewareStack, mas para o token de sessão"""
    return BearerTokenMiddleware(inner)
