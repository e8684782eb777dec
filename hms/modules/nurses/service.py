import logging
from hms.core.exceptions import DependentRecords
from hms.core.validation import check_phone, require_text
from hms.modules.nurses.models import Nurse
from hms.modules.nurses.schemas import NurseCreate, NurseSummary, NurseUpdate
from hms.store.entity_store import EntityStore

log = logging.getLogger(__name__)

class NurseService:
    def __init__(self, store: EntityStore):
        self.store = store

    def _clean(self, data: dict) -> dict:
        data["name"] = require_text(data.get("name"), "Nurse name")
        data["department"] = require_text(data.get("department"), "Department")
        data["phone"] = check_phone(data.get("phone"))
        return data

    def create(self, payload: NurseCreate) -> Nurse:
        obj = self.store.nurses.add(Nurse(**self._clean(payload.model_dump())))
        log.info(f"Nurse {obj.id} created")
        return obj

    def get(self, nurse_id: str) -> Nurse | None:
        return self.store.nurses.get(nurse_id)

    def list(self, q: str | None = None, department: str | None = None) -> list[Nurse]:
        needle = (q or "").lower()
        dept = (department or "").lower()
        return self.store.nurses.where(
            lambda n: (not needle or needle in n.name.lower() or needle in n.id.lower())
            and (not dept or n.department.lower() == dept)
        )

    def summary(self, nurse_id: str) -> NurseSummary | None:
        obj = self.store.nurses.get(nurse_id)
        if not obj:
            return None
        return NurseSummary(nurse=obj, patients=self.store.patients.where(lambda p: p.nurse_id == nurse_id))

    def update(self, nurse_id: str, payload: NurseUpdate) -> Nurse | None:
        obj = self.store.nurses.get(nurse_id)
        if not obj:
            return None
        data = obj.model_dump()
        data.update(payload.model_dump(exclude_unset=True))
        return self.store.nurses.edit(Nurse(**self._clean(data)))

    def delete(self, nurse_id: str) -> bool:
        if self.store.nurses.get(nurse_id) is None:
            return False
        in_use = self.store.patients.count(lambda p: p.nurse_id == nurse_id)
        if in_use:
            raise DependentRecords("Nurse", nurse_id, {"patient(s)": in_use})
        self.store.nurses.delete(nurse_id)
        log.info(f"Nurse {nurse_id} deleted")
        return True
