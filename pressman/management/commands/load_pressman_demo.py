"""
Load demo data for Pressman.

Creates a small print-shop team and a board of orders around today:
- one leader and one operator per stage, plus an administrator
- orders late, due today and due next week, some sharing an O.R
- assignments and progress on a few stages

Usage:
    python manage.py load_pressman_demo
    python manage.py load_pressman_demo --clear
"""

from datetime import timedelta

from django.core.management.base import BaseCommand
from django.utils import timezone

from pressman.adapters.django_store import DjangoStore
from pressman.entities import Actor
from pressman.service import Press, reset_press
from pressman.steps import STAGES, Role, StepStatus

TEAM = [
    ("Ana Souza", "ana@newcom.local", Role.ADMIN, "Geral", True, "Gerente de Produção"),
    ("Bruno Lima", "bruno@newcom.local", Role.OPERATOR, "preImpressao", True, "Designer"),
    ("Carla Dias", "carla@newcom.local", Role.OPERATOR, "preImpressao", False, "Arte-finalista"),
    ("Diego Alves", "diego@newcom.local", Role.OPERATOR, "impressao", True, "Impressor"),
    ("Elisa Rocha", "elisa@newcom.local", Role.OPERATOR, "impressao", False, "Impressora"),
    ("Fábio Nunes", "fabio@newcom.local", Role.OPERATOR, "producao", True, "Serralheiro"),
    ("Gina Melo", "gina@newcom.local", Role.OPERATOR, "instalacao", True, "Instaladora"),
    ("Hugo Pires", "hugo@newcom.local", Role.OPERATOR, "expedicao", False, "Motorista"),
]

# (or, numeroItem, cliente, vendedor, item, due offset in days, prioridade)
ORDERS = [
    ("5001", "1", "Padaria Central", "Carla", "Fachada ACM 3x1", -2, "Alta"),
    ("5001", "2", "Padaria Central", "Carla", "Adesivo de vitrine", -2, "Alta"),
    ("5002", "", "Auto Peças Silva", "Marcos", "Banner lona 2x1", 0, "Média"),
    ("5003", "", "Clínica Vida", "Carla", "Placa PVC sinalização", 3, "Baixa"),
    ("5004", "1", "Mercado Bom Preço", "Marcos", "Totem luminoso", 7, "Alta"),
    ("5004", "10", "Mercado Bom Preço", "Marcos", "Letra caixa", 7, "Alta"),
    ("5004", "2", "Mercado Bom Preço", "Marcos", "Adesivo piso", 7, "Média"),
]


class Command(BaseCommand):
    help = "Carrega dados de demonstração para o Pressman"

    def add_arguments(self, parser):
        parser.add_argument(
            "--clear",
            action="store_true",
            help="Limpa dados existentes antes de carregar",
        )

    def handle(self, *args, **options):
        from pressman.models import AuditLogEntry, ProductionOrder, TeamMember

        self.stdout.write("=" * 60)
        self.stdout.write("Carregando dados de demonstração do Pressman...")
        self.stdout.write("=" * 60)

        if options["clear"]:
            self.stdout.write("\nLimpando dados existentes...")
            ProductionOrder.objects.all().delete()
            AuditLogEntry.objects.all().delete()
            TeamMember.objects.all().delete()
            self.stdout.write(self.style.SUCCESS("   ✓ Dados limpos"))

        members = {}
        for name, email, role, department, is_leader, job_title in TEAM:
            member, _ = TeamMember.objects.update_or_create(
                email=email,
                defaults={
                    "name": name,
                    "role": role,
                    "department": department,
                    "is_leader": is_leader,
                    "job_title": job_title,
                },
            )
            if is_leader and department != "Geral":
                members[department] = member
        self.stdout.write(self.style.SUCCESS(f"   ✓ {len(TEAM)} colaboradores"))

        press = Press(store=DjangoStore()).load()
        admin = press.find_user_by_login("ana@newcom.local")
        today = timezone.localdate()

        created = []
        for number, ref, client, seller, item, offset, priority in ORDERS:
            result = press.create_order(
                {
                    "or": number,
                    "numeroItem": ref,
                    "cliente": client,
                    "vendedor": seller,
                    "item": item,
                    "dataEntrega": (today + timedelta(days=offset)).isoformat(),
                    "prioridade": priority,
                    "filePath": f"\\\\srv-arte\\{number}",
                },
                admin,
            )
            created.append(result.order)
        self.stdout.write(self.style.SUCCESS(f"   ✓ {len(created)} ordens"))

        self._advance_demo(press, created, members, admin)

        reset_press()
        self.stdout.write(self.style.SUCCESS("\n✓ Demonstração carregada"))

    def _advance_demo(self, press, orders, members, admin: Actor):
        """Spread the orders across the pipeline, with assignees."""
        for index, order in enumerate(orders):
            done_stages = STAGES[: index % len(STAGES)]
            for stage in done_stages:
                press.advance_status(order.id, stage, StepStatus.DONE, admin)

            active = STAGES[index % len(STAGES)]
            member = members.get(str(active))
            if member is None:
                continue
            press.assign_user(order.id, active, str(member.pk), note="Demo", actor=admin)
            if index % 2:
                press.advance_status(order.id, active, StepStatus.IN_PROGRESS, member.to_actor())
