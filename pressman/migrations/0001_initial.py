# Generated manually: production orders (with history), team roster, audit log

import django.db.models.deletion
import django.utils.timezone
import simple_history.models
from django.conf import settings
from django.db import migrations, models

import pressman.models.production_order


PRIORITY_CHOICES = [("Alta", "Alta"), ("Média", "Média"), ("Baixa", "Baixa")]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ProductionOrder",
            fields=[
                (
                    "id",
                    models.CharField(
                        max_length=64,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("order_number", models.CharField(db_index=True, max_length=50, verbose_name="O.R")),
                ("item_ref", models.CharField(blank=True, max_length=50, verbose_name="Nº do Item")),
                ("client", models.CharField(max_length=200, verbose_name="Cliente")),
                ("salesperson", models.CharField(max_length=100, verbose_name="Vendedor")),
                ("item", models.CharField(max_length=255, verbose_name="Item")),
                ("quantity", models.CharField(blank=True, max_length=50, verbose_name="Quantidade")),
                ("due_date", models.DateField(db_index=True, verbose_name="Data de Entrega")),
                (
                    "priority",
                    models.CharField(
                        choices=PRIORITY_CHOICES,
                        default="Média",
                        max_length=10,
                        verbose_name="Prioridade",
                    ),
                ),
                ("notes", models.TextField(blank=True, verbose_name="Observação")),
                ("is_remake", models.BooleanField(default=False, verbose_name="Refação")),
                (
                    "statuses",
                    models.JSONField(
                        default=pressman.models.production_order._default_statuses,
                        verbose_name="Status por Etapa",
                    ),
                ),
                ("assignments", models.JSONField(blank=True, default=dict, verbose_name="Atribuições")),
                ("audit_trail", models.JSONField(blank=True, default=list, verbose_name="Histórico")),
                ("file_paths", models.JSONField(blank=True, default=list, verbose_name="Caminhos de Rede")),
                ("extra", models.JSONField(blank=True, default=dict, verbose_name="Dados Extras")),
                ("is_archived", models.BooleanField(db_index=True, default=False, verbose_name="Arquivada")),
                ("archived_at", models.DateTimeField(blank=True, null=True, verbose_name="Arquivada em")),
                ("created_at", models.DateTimeField(blank=True, null=True, verbose_name="Criada em")),
                ("created_by", models.CharField(blank=True, max_length=100, verbose_name="Criada por")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Atualizada em")),
            ],
            options={
                "verbose_name": "Ordem de Produção",
                "verbose_name_plural": "Ordens de Produção",
                "db_table": "pressman_production_order",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="TeamMember",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("name", models.CharField(max_length=100, verbose_name="Nome")),
                (
                    "email",
                    models.EmailField(
                        help_text="Login do colaborador",
                        max_length=254,
                        unique=True,
                        verbose_name="E-mail",
                    ),
                ),
                (
                    "role",
                    models.CharField(
                        choices=[("Admin", "Administrador"), ("Operador", "Operador")],
                        default="Operador",
                        max_length=20,
                        verbose_name="Perfil",
                    ),
                ),
                (
                    "department",
                    models.CharField(
                        default="Geral",
                        help_text="Etapa (preImpressao, impressao...) ou 'Geral'",
                        max_length=30,
                        verbose_name="Departamento",
                    ),
                ),
                ("job_title", models.CharField(blank=True, max_length=100, verbose_name="Cargo")),
                ("is_leader", models.BooleanField(default=False, verbose_name="Líder")),
                ("is_active", models.BooleanField(default=True, verbose_name="Ativo")),
                (
                    "user",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="team_member",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Usuário",
                    ),
                ),
            ],
            options={
                "verbose_name": "Colaborador",
                "verbose_name_plural": "Colaboradores",
                "db_table": "pressman_team_member",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="AuditLogEntry",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "action_type",
                    models.CharField(
                        choices=[
                            ("DELETE_ORDER", "Exclusão de O.R"),
                            ("DELETE_USER", "Exclusão de Colaborador"),
                        ],
                        db_index=True,
                        max_length=20,
                        verbose_name="Ação",
                    ),
                ),
                ("user_id", models.CharField(max_length=64, verbose_name="ID do Usuário")),
                ("user_name", models.CharField(max_length=100, verbose_name="Usuário")),
                ("target_info", models.CharField(max_length=255, verbose_name="Alvo")),
                (
                    "timestamp",
                    models.DateTimeField(
                        db_index=True,
                        default=django.utils.timezone.now,
                        verbose_name="Data/Hora",
                    ),
                ),
            ],
            options={
                "verbose_name": "Registro de Auditoria",
                "verbose_name_plural": "Registros de Auditoria",
                "db_table": "pressman_audit_log",
                "ordering": ["-timestamp"],
            },
        ),
        # ══════════════════════════════════════════════════════════════
        # HISTORICAL RECORDS
        # ══════════════════════════════════════════════════════════════
        migrations.CreateModel(
            name="HistoricalProductionOrder",
            fields=[
                ("id", models.CharField(db_index=True, max_length=64, verbose_name="ID")),
                ("order_number", models.CharField(db_index=True, max_length=50, verbose_name="O.R")),
                ("item_ref", models.CharField(blank=True, max_length=50, verbose_name="Nº do Item")),
                ("client", models.CharField(max_length=200, verbose_name="Cliente")),
                ("salesperson", models.CharField(max_length=100, verbose_name="Vendedor")),
                ("item", models.CharField(max_length=255, verbose_name="Item")),
                ("quantity", models.CharField(blank=True, max_length=50, verbose_name="Quantidade")),
                ("due_date", models.DateField(db_index=True, verbose_name="Data de Entrega")),
                (
                    "priority",
                    models.CharField(
                        choices=PRIORITY_CHOICES,
                        default="Média",
                        max_length=10,
                        verbose_name="Prioridade",
                    ),
                ),
                ("notes", models.TextField(blank=True, verbose_name="Observação")),
                ("is_remake", models.BooleanField(default=False, verbose_name="Refação")),
                (
                    "statuses",
                    models.JSONField(
                        default=pressman.models.production_order._default_statuses,
                        verbose_name="Status por Etapa",
                    ),
                ),
                ("assignments", models.JSONField(blank=True, default=dict, verbose_name="Atribuições")),
                ("audit_trail", models.JSONField(blank=True, default=list, verbose_name="Histórico")),
                ("file_paths", models.JSONField(blank=True, default=list, verbose_name="Caminhos de Rede")),
                ("extra", models.JSONField(blank=True, default=dict, verbose_name="Dados Extras")),
                ("is_archived", models.BooleanField(db_index=True, default=False, verbose_name="Arquivada")),
                ("archived_at", models.DateTimeField(blank=True, null=True, verbose_name="Arquivada em")),
                ("created_at", models.DateTimeField(blank=True, null=True, verbose_name="Criada em")),
                ("created_by", models.CharField(blank=True, max_length=100, verbose_name="Criada por")),
                ("updated_at", models.DateTimeField(blank=True, editable=False, verbose_name="Atualizada em")),
                ("history_id", models.AutoField(primary_key=True, serialize=False)),
                ("history_date", models.DateTimeField(db_index=True)),
                ("history_change_reason", models.CharField(max_length=100, null=True)),
                (
                    "history_type",
                    models.CharField(
                        choices=[("+", "Created"), ("~", "Changed"), ("-", "Deleted")],
                        max_length=1,
                    ),
                ),
                (
                    "history_user",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "historical Ordem de Produção",
                "verbose_name_plural": "historical Ordens de Produção",
                "ordering": ("-history_date", "-history_id"),
                "get_latest_by": ("history_date", "history_id"),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
    ]
