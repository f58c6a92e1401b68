"""
mxwrap CLI - inspect JSON-lines action logs

Commands:
- mxwrap replay - Fold an action log and report the resulting state
- mxwrap rooms - Fold an action log and list the rooms it produced
- mxwrap version - Show version information
"""
