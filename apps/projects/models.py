# apps/projects/models.py
from django.db import models


class Project(models.Model):
    name = models.CharField(max_length=255, unique=True)
    description = models.TextField(blank=True, default="")

    # Hierarchia (Podprojekty). PROTECT: najpierw trzeba usunąć dzieci
    parent_project = models.ForeignKey(
        'self',
        null=True, blank=True,
        on_delete=models.PROTECT,
        related_name='subprojects'
    )

    creation_date = models.DateTimeField(auto_now_add=True)
    last_modified_date = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'projects'
        ordering = ['id']

    def __str__(self):
        return self.name
