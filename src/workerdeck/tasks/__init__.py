"""
Task subsystem.

Components:
- task_models.py: data structures (TaskSnapshot, DurationRange, TaskSpec)
- scheduled_task.py: one periodic worker (initial/regular timer, manual runs, stop with grace period)
- work.py: simulated work bodies
- roster.py: the fixed list of demo workers
- registry.py: start/stop/trigger fan-out and status snapshots for the console
"""
