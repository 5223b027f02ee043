# apps/board/validators.py

from django.core.exceptions import ValidationError

# Campos obrigatórios de cada referência de anexo (formato do Upload Relay)
CAMPOS_ANEXO = ('filename', 'originalName', 'url', 'mimetype', 'size')


def validate_attachments(value):
    """
    Valida a lista de anexos de uma tarefa

    Cada item é o registro devolvido pelo Upload Relay:
    {filename, originalName, url, mimetype, size}
    """
    if not isinstance(value, list):
        raise ValidationError('Attachments must be a list.')

    for idx, anexo in enumerate(value):
        if not isinstance(anexo, dict):
            raise ValidationError(f'Attachment {idx} must be an object.')

        faltando = [campo for campo in CAMPOS_ANEXO if campo not in anexo]
        if faltando:
            raise ValidationError(f"Attachment {idx} is missing: {', '.join(faltando)}.")

        for campo in ('filename', 'originalName', 'url', 'mimetype'):
            if not isinstance(anexo[campo], str):
                raise ValidationError(f'Attachment {idx} field {campo} must be a string.')

        size = anexo['size']
        if isinstance(size, bool) or not isinstance(size, int) or size < 0:
            raise ValidationError(f'Attachment {idx} size must be a non-negative integer.')
