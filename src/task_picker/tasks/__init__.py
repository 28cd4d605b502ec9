"""
Task subsystem.

Components:
- task_models.py: data structures (TaskDescriptor, RunningTaskInfo, TaskKind)
- reconciler.py: merges recent / configured / detected tasks into disjoint buckets
- task_store.py: JSON-file task definitions + local TaskService
"""
