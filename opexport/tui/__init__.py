"""
op-export TUI — Textual front end for the interactive exporter.

Usage:
    from opexport.tui.app import ExportApp
    ExportApp().run()
"""
