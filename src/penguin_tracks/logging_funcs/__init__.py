"""penguin_tracks.logging_funcs

Standardised logging setup: `penguin_tracks.logging_funcs.logging.set_loggers`
and an `exception_hook` to route uncaught exceptions to the error log.
"""
