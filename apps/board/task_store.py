# apps/board/task_store.py

"""
Task Store - acesso às tarefas sempre escopado pela conta dona

Toda leitura e escrita passa por aqui. Cada mutação afeta exatamente
uma linha e roda numa transação própria com lock da linha, então não
existe lock global nem transação entre várias tarefas.

O store não faz broadcast: isso é responsabilidade do consumer.
"""

import logging
import math
import numbers
from typing import Dict, List

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Case, IntegerField, Value, When

from apps.core.exceptions import NotFound, ValidationError
from .models import Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Contrato:
    - list(account_id) -> tarefas ordenadas por (coluna, order)
    - create(account_id, fields) -> Task
    - update(account_id, task_id, fields) -> Task
    - move(account_id, task_id, destination_column, destination_order) -> Task
    - delete(account_id, task_id) -> Task removida
    """

    # Campos que o cliente pode escrever - owner/id/timestamps nunca vêm do payload
    EDITABLE_FIELDS = ('title', 'description', 'priority', 'category', 'column', 'attachments', 'order')

    def list(self, account_id) -> List[Task]:
        ordem_coluna = Case(
            *[When(column=coluna, then=Value(idx)) for idx, coluna in enumerate(Task.ORDEM_COLUNAS)],
            default=Value(len(Task.ORDEM_COLUNAS)),
            output_field=IntegerField(),
        )
        return list(
            Task.objects.filter(owner_id=account_id)
            .annotate(ordem_coluna=ordem_coluna)
            .order_by('ordem_coluna', 'order', 'created_at')
        )

    def get(self, account_id, task_id) -> Task:
        try:
            return Task.objects.get(pk=task_id, owner_id=account_id)
        except (Task.DoesNotExist, DjangoValidationError, ValueError, TypeError):
            # id malformado também é "não encontrado" - nunca revela nada de outras contas
            raise NotFound()

    def create(self, account_id, fields: Dict) -> Task:
        fields = self._como_dict(fields)

        with transaction.atomic():
            task = Task(owner_id=account_id)
            self._aplicar_campos(task, fields)
            self._validar(task)
            task.save()

        logger.info(f"📝 Tarefa criada: {task.pk} (conta {account_id})")
        return task

    def update(self, account_id, task_id, fields: Dict) -> Task:
        fields = self._como_dict(fields)

        with transaction.atomic():
            task = self._get_for_update(account_id, task_id)
            self._aplicar_campos(task, fields)
            self._validar(task)
            task.save()

        logger.info(f"✏️ Tarefa atualizada: {task.pk} (conta {account_id})")
        return task

    def move(self, account_id, task_id, destination_column, destination_order) -> Task:
        """
        Define coluna e ordem numa única escrita

        A instância devolvida carrega `previous_column` (coluna antes do
        movimento), usado no evento task:moved.
        """
        with transaction.atomic():
            task = self._get_for_update(account_id, task_id)
            previous_column = task.column
            task.column = destination_column
            task.order = self._como_numero(destination_order, 'destinationIndex')
            self._validar(task)
            task.save(update_fields=['column', 'order', 'updated_at'])

        task.previous_column = previous_column
        logger.info(f"↔️ Tarefa {task.pk} movida de {previous_column} para {destination_column}")
        return task

    def delete(self, account_id, task_id) -> Task:
        with transaction.atomic():
            task = self._get_for_update(account_id, task_id)
            task_pk = task.pk
            task.delete()

        # delete() zera a pk da instância
        task.pk = task_pk
        logger.info(f"🗑️ Tarefa removida: {task_pk} (conta {account_id})")
        return task

    # =================== MÉTODOS PRIVADOS ===================

    def _get_for_update(self, account_id, task_id) -> Task:
        try:
            return Task.objects.select_for_update().get(pk=task_id, owner_id=account_id)
        except (Task.DoesNotExist, DjangoValidationError, ValueError, TypeError):
            raise NotFound()

    def _como_dict(self, fields) -> Dict:
        if fields is None:
            return {}
        if not isinstance(fields, dict):
            raise ValidationError('Task payload must be an object')
        return fields

    def _aplicar_campos(self, task: Task, fields: Dict):
        """Mescla apenas os campos editáveis presentes no payload"""
        for campo in self.EDITABLE_FIELDS:
            if campo not in fields:
                continue

            valor = fields[campo]

            if campo in ('title', 'description'):
                if valor is None:
                    valor = ''
                if not isinstance(valor, str):
                    raise ValidationError(errors={campo: ['Must be a string.']})
                valor = valor.strip()

            elif campo == 'order':
                valor = self._como_numero(valor, campo)

            elif campo == 'attachments' and valor is None:
                valor = []

            setattr(task, campo, valor)

    def _como_numero(self, valor, campo: str) -> float:
        if isinstance(valor, bool) or not isinstance(valor, numbers.Real):
            raise ValidationError(errors={campo: ['Must be a number.']})

        # Infinity/NaN não têm representação em JSON estrito
        try:
            numero = float(valor)
        except OverflowError:
            raise ValidationError(errors={campo: ['Must be a finite number.']})
        if not math.isfinite(numero):
            raise ValidationError(errors={campo: ['Must be a finite number.']})
        return numero

    def _validar(self, task: Task):
        """Roda as validações do model e converte para o erro do board"""
        try:
            task.full_clean(exclude=['owner'])
        except DjangoValidationError as e:
            raise ValidationError(errors=e.message_dict)


# Instância global do serviço (Singleton pattern)
task_store = TaskStore()
