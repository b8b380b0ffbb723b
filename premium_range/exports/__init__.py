"""Exports & presentation: pure projections over a CalcResult.

- formatting.py: CNY currency, percent and plain-number rendering
- display.py: badge, range line and per-scenario display strings
- reports.py: ordered copy/paste text export and assumptions.md
- writers.py: CSV emitter with a fixed column schema
"""
