"""Command-line front-ends and development helpers.

This package contains the Matplotlib plotter (static, saved, or interactive
views of one pipeline run) and the opt-in timing hooks enabled by the
``JITTERSIM_DEBUG`` environment variable.
"""
