"""
Run the automated due-today / overdue scan.

Usage:
    python manage.py scan_deadlines
    python manage.py scan_deadlines --loop --interval 60
"""

import time

from django.core.management.base import BaseCommand

from pressman.conf import get_setting
from pressman.service import get_press


class Command(BaseCommand):
    help = "Verifica prazos (vence hoje / atrasadas) e gera notificações"

    def add_arguments(self, parser):
        parser.add_argument(
            "--loop",
            action="store_true",
            help="Repete a verificação até ser interrompido",
        )
        parser.add_argument(
            "--interval",
            type=int,
            default=None,
            help="Segundos entre verificações (padrão: SCAN_INTERVAL_SECONDS)",
        )

    def handle(self, *args, **options):
        interval = options["interval"] or get_setting("SCAN_INTERVAL_SECONDS")
        press = get_press()

        if not options["loop"]:
            self._scan_once(press)
            return

        self.stdout.write(f"Verificando prazos a cada {interval}s (Ctrl+C para sair)")
        try:
            while True:
                press.refresh()
                self._scan_once(press)
                time.sleep(interval)
        except KeyboardInterrupt:
            self.stdout.write("Interrompido.")

    def _scan_once(self, press):
        added = press.scan()
        for notification in added:
            self.stdout.write(f"  [{notification.type}] {notification.message}")
        self.stdout.write(
            self.style.SUCCESS(f"✓ {len(added)} nova(s) notificação(ões) de prazo")
        )
