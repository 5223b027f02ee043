# apps/core/management/commands/seed.py

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.board.task_store import task_store
from apps.core.models import Usuario

# Quadro inicial de boas-vindas
TAREFAS_BOAS_VINDAS = [
    {
        'title': 'Welcome to Kanban!',
        'description': 'Drag this task to another column to get started.',
        'priority': 'medium',
        'category': 'feature',
        'column': 'todo',
    },
    {
        'title': 'Setup WebSocket Connection',
        'description': 'Implement real-time updates using WebSockets',
        'priority': 'high',
        'category': 'feature',
        'column': 'inprogress',
    },
    {
        'title': 'Initial Project Setup',
        'description': 'Created the project with all dependencies',
        'priority': 'low',
        'category': 'enhancement',
        'column': 'done',
    },
]


class Command(BaseCommand):
    help = 'Cria a conta demo com as tarefas de boas-vindas'

    def add_arguments(self, parser):
        parser.add_argument('--username', default='demo')
        parser.add_argument('--email', default='demo@kanban.local')
        parser.add_argument('--password', default='demo12345')

    def handle(self, *args, **options):
        self.stdout.write('🌱 Populando quadro demo...')

        with transaction.atomic():
            usuario, criado = Usuario.objects.get_or_create(
                username=options['username'],
                defaults={'email': options['email'].lower()},
            )
            if criado:
                usuario.set_password(options['password'])
                usuario.save(update_fields=['password'])
                self.stdout.write(f'  👤 Conta criada: {usuario.username}')
            else:
                self.stdout.write(f'  👤 Conta já existente: {usuario.username}')

            if usuario.tasks.exists():
                self.stdout.write(self.style.WARNING('  ⚠️  Conta já possui tarefas, nada a fazer'))
                return

            for ordem, dados in enumerate(TAREFAS_BOAS_VINDAS):
                task = task_store.create(usuario.pk, dict(dados, order=ordem))
                self.stdout.write(f'    ✅ {task.title} ({task.column})')

        self.stdout.write(
            self.style.SUCCESS(
                f'\n✅ Quadro demo pronto!\n'
                f'🔑 Acesse com: {options["username"]}/{options["password"]}\n'
            )
        )
