"""
TeamMember model.

Shop-floor roster: who can be assigned, in which department, with which role.
Login itself belongs to Django auth; a member may link to an auth user.
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from pressman.entities import Actor
from pressman.steps import Role


class TeamMember(models.Model):
    """Colaborador da produção."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="team_member",
        verbose_name=_("Usuário"),
    )
    name = models.CharField(max_length=100, verbose_name=_("Nome"))
    email = models.EmailField(
        unique=True,
        verbose_name=_("E-mail"),
        help_text=_("Login do colaborador"),
    )
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.OPERATOR,
        verbose_name=_("Perfil"),
    )
    department = models.CharField(
        max_length=30,
        default="Geral",
        verbose_name=_("Departamento"),
        help_text=_("Etapa (preImpressao, impressao...) ou 'Geral'"),
    )
    job_title = models.CharField(
        max_length=100,
        blank=True,
        verbose_name=_("Cargo"),
    )
    is_leader = models.BooleanField(default=False, verbose_name=_("Líder"))
    is_active = models.BooleanField(default=True, verbose_name=_("Ativo"))

    class Meta:
        db_table = "pressman_team_member"
        verbose_name = _("Colaborador")
        verbose_name_plural = _("Colaboradores")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name

    def to_actor(self) -> Actor:
        return Actor(
            id=str(self.pk),
            name=self.name,
            role=self.role,
            department=self.department,
            is_leader=self.is_leader,
            email=self.email,
            job_title=self.job_title,
        )
