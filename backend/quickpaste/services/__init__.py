# Services package init
"""
QuickPaste Backend - Services Layer
====================================

What:  Logic between the routes (HTTP) and the stores (persistence).

Service Inventory:
    - Highlighter / HighlightResources: Pygments rendering to ANSI escapes
    - PasteService: the five paste operations over an AppContext
"""
