"""
Comando para revisar servicios cuya comisión guardada no coincide con el porcentaje del mecánico
"""
from django.core.management.base import BaseCommand

from servicios.models import Servicio
from servicios.services import servicios_con_comision_inconsistente


class Command(BaseCommand):
    help = 'Lista los servicios cuya comisión guardada difiere de la calculada con el porcentaje del mecánico'

    def add_arguments(self, parser):
        parser.add_argument(
            '--sucursal',
            type=int,
            help='Limitar la revisión a una sucursal',
        )
        parser.add_argument(
            '--verbose',
            action='store_true',
            help='Mostrar el detalle de cada servicio inconsistente',
        )

    def handle(self, *args, **options):
        queryset = Servicio.objects.select_related('mecanico').filter(mecanico__isnull=False)
        if options.get('sucursal'):
            queryset = queryset.filter(sucursal_id=options['sucursal'])

        inconsistentes = servicios_con_comision_inconsistente(queryset)

        if options['verbose']:
            for fila in inconsistentes:
                self.stdout.write(
                    f"   Servicio #{fila['servicio']} ({fila['mecanico']}): "
                    f"guardada={fila['comision_guardada']} calculada={fila['comision_calculada']} "
                    f"sobre {fila['monto_total']}"
                )

        if inconsistentes:
            self.stdout.write(
                self.style.WARNING(f'Se encontraron {len(inconsistentes)} servicios con comisión inconsistente')
            )
        else:
            self.stdout.write(self.style.SUCCESS('Todas las comisiones coinciden con el porcentaje del mecánico'))
