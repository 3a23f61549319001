"""
Planner core.

Components:
- models.py: data structures (Subject, Task, TaskStatus)
- attendance.py: absence percentage, allowance and risk level
- task_order.py: derived task status, toggling and due-date ordering
- snapshot.py: immutable Snapshot + one-change-at-a-time commands
- ports.py: store Protocol
"""
