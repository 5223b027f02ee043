# apps/core/exceptions.py

"""
Taxonomia de erros do board

Cada erro carrega a mensagem que vai para o cliente e o status HTTP
equivalente. Consumers convertem em evento `error`, views em JsonResponse.
"""

from typing import Dict, List, Optional


class BoardError(Exception):
    """Erro base - nunca deve derrubar o processo do servidor"""

    status_code = 400
    default_message = 'Erro na operação'

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def as_dict(self) -> Dict:
        return {'error': self.message}


class ValidationError(BoardError):
    """Campos de tarefa malformados ou fora do intervalo permitido"""

    default_message = 'Invalid task data'

    def __init__(self, message: Optional[str] = None, errors: Optional[Dict[str, List[str]]] = None):
        self.errors = errors or {}
        if message is None and self.errors:
            message = '; '.join(
                f"{campo}: {' '.join(mensagens)}" for campo, mensagens in self.errors.items()
            )
        super().__init__(message)

    def as_dict(self) -> Dict:
        data = super().as_dict()
        if self.errors:
            data['fields'] = self.errors
        return data


class DuplicateAccount(ValidationError):
    status_code = 409
    default_message = 'Username or email already registered'


class NotFound(BoardError):
    """Tarefa inexistente ou pertencente a outra conta"""

    status_code = 404
    default_message = 'Task not found'


class AuthError(BoardError):
    """
    Token ausente, malformado, expirado, com assinatura inválida
    ou apontando para uma conta que não existe mais
    """

    status_code = 401
    default_message = 'Not authorized'

    def __init__(self, message: Optional[str] = None, code: str = 'invalid'):
        self.code = code
        super().__init__(message)


class UploadError(BoardError):
    """Tipo de arquivo não permitido ou arquivo grande demais"""

    default_message = 'Upload failed'
