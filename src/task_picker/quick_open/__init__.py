"""
Task quick-open.

Components:
- items.py: picker items for the run / attach / configure flows
- actions.py: secondary per-item actions
- session.py: QuickOpenTask, the picker session state machine
"""
