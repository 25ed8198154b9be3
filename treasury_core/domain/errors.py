from __future__ import annotations


class ProjectionError(ValueError):
    """Base class for caller-input errors raised by the mix projector."""


class EmptyMixError(ProjectionError):
    def __init__(self):
        super().__init__("Mix has no instrument with a positive percentage")


class InvalidHorizonSetError(ProjectionError):
    def __init__(self, floor: int):
        self.floor = floor
        super().__init__(f"No milestone month at or above the {floor}-month floor")


class UnknownInstrumentError(ProjectionError):
    def __init__(self, instrument_id: str):
        self.instrument_id = instrument_id
        super().__init__(f"Unknown instrument: {instrument_id}")
