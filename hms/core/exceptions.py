"""Domain errors raised by the store and services, mapped to HTTP in hms.main."""


class HmsError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(HmsError):
    status_code = 400


class NotFound(HmsError):
    status_code = 404

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class SlotConflict(HmsError):
    status_code = 409

    def __init__(self, message: str = "This slot is already booked for the selected doctor."):
        super().__init__(message)


class DependentRecords(HmsError):
    status_code = 409

    def __init__(self, entity: str, entity_id: str, dependents: dict[str, int]):
        parts = ", ".join(f"{n} {kind}" for kind, n in dependents.items() if n)
        super().__init__(f"{entity} {entity_id} is still referenced by {parts}")
        self.dependents = dependents


class InvalidTransition(HmsError):
    status_code = 409


class StorageUnavailable(HmsError):
    status_code = 503
