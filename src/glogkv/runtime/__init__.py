"""Runtime - record rendering and delivery.

Contains: logging (categorizers, renderer, delivery wrappers, logger handle).
"""
