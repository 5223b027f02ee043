# apps/board/forms.py

from django import forms


class UploadAnexoForm(forms.Form):
    """Upload multipart de um único arquivo (campo `file`)"""

    file = forms.FileField(
        error_messages={
            'required': 'No file uploaded',
            'empty': 'The submitted file is empty.',
        }
    )
