"""
task-picker: selection and launch logic behind an interactive "run task" picker.
"""
