"""Batch maintenance scripts for the civic graph corpus.

Each module exposes ``main(argv)`` and can be run directly, e.g.
``python scripts/validate_three_tier.py --data-dir data``.
"""
