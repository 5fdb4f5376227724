# apps/tasks/models.py
from django.db import models
from apps.tasks.domain.entities import Priority


class Task(models.Model):
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")

    # Każde zadanie należy do dokładnie jednego projektu
    project = models.ForeignKey(
        'projects.Project',
        on_delete=models.PROTECT,
        related_name='tasks'
    )

    # Hierarchia (Podzadania)
    parent_task = models.ForeignKey(
        'self',
        null=True, blank=True,
        on_delete=models.PROTECT,
        related_name='subtasks'
    )

    # Czas
    due_date = models.DateTimeField(null=True, blank=True)
    completion_date = models.DateTimeField(null=True, blank=True)
    task_completed = models.BooleanField(default=False)

    # Używamy IntegerChoices, ale mapujemy to na Enum domenowy
    class PriorityChoices(models.IntegerChoices):
        HIGH = Priority.HIGH.value, 'High'
        MEDIUM = Priority.MEDIUM.value, 'Medium'
        LOW = Priority.LOW.value, 'Low'
        NONE = Priority.NONE.value, 'None'

    priority = models.IntegerField(
        choices=PriorityChoices.choices,
        default=PriorityChoices.NONE
    )

    creation_date = models.DateTimeField(auto_now_add=True)
    last_updated_date = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'tasks'
        ordering = ['id']

    def __str__(self):
        return self.name
