"""
Command Line Interface Package

Click-based `ginny` command.

Command Structure:
- ginny: Main entry point with utility commands (version, config)
- ginny sync: Pull bank emails into stored transactions, show sync status
- ginny parse: Parse a single .eml file without storing anything
- ginny transactions: List stored transactions
- ginny stats: Monthly, category and per-bank summaries
- ginny demo: Seed sample transactions
"""
