"""
Domain layer: local values that live only for the duration of a workflow run.
"""
