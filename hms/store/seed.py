import json
from datetime import date
from typing import Any

def default_seed(today: date | None = None) -> dict[str, Any]:
    """Initial collections used when storage holds nothing (or nothing usable)."""
    today = today or date.today()
    return {
        "patients": [
            {"id": "P-001", "name": "Ahmad Saleh", "dob": "1979-05-12", "status": "In Treatment", "gender": "Male",
             "phone": "0781234567", "doctor_id": "D-001", "nurse_id": "N-001"},
            {"id": "P-002", "name": "Sara Mahmoud", "dob": "1993-08-21", "status": "Active", "gender": "Female",
             "phone": "0799876543", "doctor_id": "D-002", "nurse_id": "N-002"},
        ],
        "doctors": [
            {"id": "D-001", "name": "Dr. Omar Khaled", "specialization": "Dermatology", "department": "Dermatology",
             "city": "Amman", "phone": "0781112223", "dob": "1975-03-12"},
            {"id": "D-002", "name": "Dr. Lina Yousef", "specialization": "Neurology", "department": "Neurology",
             "city": "Amman", "phone": "0794445556", "dob": "1980-09-28"},
        ],
        "nurses": [
            {"id": "N-001", "name": "Nurse Rania", "department": "Dermatology", "phone": "0782223334", "dob": "1985-06-10"},
            {"id": "N-002", "name": "Nurse Yara", "department": "Neurology", "phone": "0795556667", "dob": "1990-12-05"},
        ],
        "appointments": [
            {"id": "A-001", "patient_id": "P-001", "doctor_id": "D-001", "date": "2025-12-20", "time": "10:00 AM",
             "status": "Scheduled"},
            {"id": "A-002", "patient_id": "P-002", "doctor_id": "D-002", "date": today.isoformat(), "time": "11:00 AM",
             "status": "Confirmed"},
        ],
        "doctor_slots": {
            "D-001": ["09:00 AM", "10:00 AM", "11:00 AM", "02:00 PM", "03:00 PM"],
            "D-002": ["10:00 AM", "11:00 AM", "01:00 PM", "02:00 PM", "04:00 PM"],
        },
        "waitlist": [],
        "transfers": [],
        "posts": [
            {"id": "POST-001", "title": "Healthy Smoothie Recipes",
             "content": "Here are some delicious and healthy smoothies to boost immunity.",
             "category": "Diet", "created_at": "2025-12-20T09:00:00Z", "likes": 3, "comments": []},
            {"id": "POST-002", "title": "Meditation Tips",
             "content": "Simple meditation exercises for mental well-being.",
             "category": "Mental Health", "created_at": "2025-12-18T09:00:00Z", "likes": 5, "comments": []},
        ],
        "notifications": [
            {"id": "NTF-001", "type": "Override Request", "sender": "Nurse Rania", "recipient": "Dr. Omar Khaled",
             "status": "pending", "message": "Request to change medication dosage for patient P-001",
             "description": "Low response to current dosage; requires doctor approval.",
             "sent_at": "2025-12-19T08:30:00Z"},
        ],
    }

def load_seed_file(path: str) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"seed file {path} must contain a JSON object of collections")
    return data
