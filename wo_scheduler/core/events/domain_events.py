
""" Notify listeners (views, exporters) when a schedule is recomputed or edited"""
from PySide6.QtCore import QObject, Signal


class DomainEvents(QObject):
    schedule_changed = Signal(str)  # schedule_id, after every recompute
    tasks_changed = Signal(str)     # schedule_id, after add/delete/reorder/relink
    history_changed = Signal(str)   # schedule_id, after push/undo/redo


# SINGLE global instance
domain_events = DomainEvents()
