from django.core.management.base import BaseCommand

from users.models import Rol
from users.roles import crear_roles_base


class Command(BaseCommand):
    help = "Crea los roles base del taller (ADMIN, ENCARGADO, RECEPCIONISTA) si no existen."

    def add_arguments(self, parser):
        parser.add_argument(
            '--actualizar',
            action='store_true',
            help='Sobrescribir los permisos de los roles base existentes',
        )

    def handle(self, *args, **options):
        creados = crear_roles_base(actualizar=options['actualizar'])

        for rol in Rol.objects.all():
            self.stdout.write(f"   {rol.nombre}: {rol.usuarios.count()} usuarios")

        self.stdout.write(self.style.SUCCESS(f"Roles creados: {creados}"))
