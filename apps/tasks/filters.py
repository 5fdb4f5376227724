import django_filters
from .models import Task

class TaskFilter(django_filters.FilterSet):
    project = django_filters.NumberFilter(
        field_name='project_id',
        label="Project ID"
    )
    completed = django_filters.BooleanFilter(
        field_name='task_completed',
        label="Completed"
    )
    priority = django_filters.ChoiceFilter(
        choices=Task.PriorityChoices.choices,
        label="Priority"
    )

    class Meta:
        model = Task
        fields = ['project', 'completed', 'priority']
