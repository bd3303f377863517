from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    class Roles(models.TextChoices):
        ADMIN = "ADMIN", "Administrador"
        PROFISSIONAL = "PROFISSIONAL", "Profissional"
        RECEPCAO = "RECEPCAO", "Recepção"

    role = models.CharField(
        max_length=20,
        choices=Roles.choices,
        default=Roles.RECEPCAO,
        help_text="Papel que controla o acesso aos módulos.",
    )
    telefone = models.CharField(max_length=20, blank=True)

    # Atalhos booleanos
    @property
    def is_admin_role(self):
        return self.role == self.Roles.ADMIN

    @property
    def is_profissional_role(self):
        return self.role == self.Roles.PROFISSIONAL
