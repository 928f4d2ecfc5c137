import copy

import pytest

from hmpi_dashboard.data.store import StoreError


class FakeStore:
    """Almacén en memoria con la misma interfaz select/insert/update que SupabaseStore."""

    def __init__(self, tables=None):
        self.tables = copy.deepcopy(tables or {})
        self.failing = set()
        self._next_id = 1

    def _check(self, table):
        if table in self.failing:
            raise StoreError(f"{table} unavailable", code="PGRST000", status=503)

    def select(self, table, columns="*"):
        self._check(table)
        return copy.deepcopy(self.tables.get(table, []))

    def insert(self, table, record):
        self._check(table)
        row = dict(record)
        row.setdefault("id", f"{table[:-1]}-{self._next_id}")
        row.setdefault("createdAt", "2025-03-01T00:00:00+00:00")
        self._next_id += 1
        self.tables.setdefault(table, []).append(row)
        return [copy.deepcopy(row)]

    def update(self, table, values, match):
        self._check(table)
        updated = []
        for row in self.tables.get(table, []):
            if all(str(row.get(k)) == str(v) for k, v in match.items()):
                row.update(copy.deepcopy(values))
                updated.append(copy.deepcopy(row))
        return updated


@pytest.fixture
def store():
    return FakeStore(
        {
            "projects": [
                {
                    "id": "p1",
                    "name": "Ganga Basin",
                    "description": "Varanasi ghats",
                    "district": "Varanasi",
                    "city": "Varanasi",
                    "createdAt": "2025-01-01T00:00:00+00:00",
                    "policyMakerThresholds": {"HMPI": 20, "notes": "initial"},
                },
                {"id": "p2", "name": "Yamuna", "policyMakerThresholds": {}},
            ],
            "samples": [
                # HMPI 21.0 (Low Risk)
                {"id": "s1", "projectId": "p1", "sampleId": "GNG-008", "metal": "Lead",
                 "Si": 0.09, "Ii": 0.3, "Mi": 0.7, "date": "2025-02-01"},
                # HMPI 120.0 (Very High Risk)
                {"id": "s2", "projectId": "p1", "sampleId": "GNG-009", "metal": "Arsenic",
                 "Si": 0.6, "Ii": 0.5, "Mi": 1.0, "date": "2025-01-01"},
                # HMPI 10.0 (Low Risk)
                {"id": "s3", "projectId": "p1", "sampleId": "GNG-010", "metal": "Lead",
                 "Si": 1, "Ii": 10, "Mi": 1, "date": "2025-01-15"},
                {"id": "s4", "projectId": "p2", "sampleId": "YMN-006", "metal": "Arsenic",
                 "Si": 0.05, "Ii": 0.2, "Mi": 0.5, "date": "2025-02-12"},
            ],
            "alerts": [
                {"id": "a1", "projectId": "p1", "sampleId": "s2", "message": "High HMPI",
                 "severity": "high", "acknowledged": False, "createdAt": "2025-02-02T00:00:00+00:00"},
            ],
            "policies": [
                {"id": "pol1", "name": "Lead limit", "metal": "Lead", "threshold": 0.01,
                 "createdBy": "u1", "createdAt": "2025-01-05T00:00:00+00:00"},
            ],
        }
    )
