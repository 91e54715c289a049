"""
prconflict - show unresolved pull request review threads inline.

Fetches the review threads of a pull request, keeps the comments of threads
that are still unresolved, and inserts Git-style conflict blocks above the
lines they are anchored to in the local checkout.

Usage:
    prconflict --repo owner/name --pr 42 [--dry-run]
"""

__version__ = "0.4.0"
