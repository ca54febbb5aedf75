"""
Command Line Interface Package

CLI for ledger itemization.

Command Structure:
- itemizer: Main entry point with utility commands (version, config)
- itemizer join: Fetch ledger entries, reconcile them with order exports,
  report the outcome and push itemizations (or preview with --dry-run)
"""
