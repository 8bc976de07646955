"""
Generators: render source templates declared by annotations.

Each public entry point in ``bindings`` takes one annotated construct
and returns a list of ``WriteDirective`` instances.
"""
