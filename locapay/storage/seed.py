"""Default roster used on first start and when stored data is unreadable."""

from locapay.models.tenant import Roster, Tenant


SEED_TENANTS = [
    {"id": 1, "name": "Diallo", "first_name": "Mamadou", "room_label": "A-101",
     "rent": 150000, "meter_previous": 120, "meter_current": 245},
    {"id": 2, "name": "Ndiaye", "first_name": "Fatou", "room_label": "A-102",
     "rent": 175000, "meter_previous": 180, "meter_current": 310},
    {"id": 3, "name": "Sarr", "first_name": "Ousmane", "room_label": "B-201",
     "rent": 200000, "meter_previous": 200, "meter_current": 420},
    {"id": 4, "name": "Touré", "first_name": "Aminata", "room_label": "B-202",
     "rent": 165000, "meter_previous": 150, "meter_current": 280},
    {"id": 5, "name": "Ba", "first_name": "Moussa", "room_label": "C-301",
     "rent": 185000, "meter_previous": 220, "meter_current": 380},
]


def seed_roster() -> Roster:
    """A fresh copy of the five demo tenants."""
    return Roster(tenants=[Tenant(**data) for data in SEED_TENANTS])
