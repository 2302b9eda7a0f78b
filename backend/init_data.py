"""
Seed data script
Creates the VIPAT rooms, staff, a monthly tenant and a few bookings and
expenses, writing through the store so ids and validation match the API.

Run from backend/:
    python init_data.py           # seed an empty database
    python init_data.py --reset   # wipe the sheets first
"""
import sys
from datetime import date, timedelta

from hms.database import Base, SessionLocal, engine, init_db
from hms.store.sheet_store import SheetStore


ROOM_LAYOUT = [
    # (numbers, type, price)
    ([f"A1{n:02d}" for n in range(1, 6)], "Standard", 400),
    ([f"A1{n:02d}" for n in range(6, 11)], "Standard Twin", 500),
    (["A111"] + [f"A2{n:02d}" for n in range(1, 12)], "Standard", 400),
    ([f"B1{n:02d}" for n in range(1, 11)], "Standard", 400),
    (["B111"], "Standard Twin", 500),
    ([f"B2{n:02d}" for n in range(1, 12)], "Standard", 400),
    (["N1"], "Standard Twin", 600),
    (["N2", "N3"], "Standard", 500),
    (["N4", "N5", "N6"], "Standard Twin", 600),
    (["N7"], "Standard", 500),
]

EMPLOYEES = [
    {"name": "สมชาย ใจดี", "position": "Manager", "hire_date": "2022-01-15",
     "salary_type": "Monthly", "salary_rate": 45000},
    {"name": "มานี รักไทย", "position": "Receptionist", "hire_date": "2023-03-01",
     "salary_type": "Monthly", "salary_rate": 22000},
    {"name": "วิชัย มีสุข", "position": "Housekeeping", "hire_date": "2023-08-20",
     "salary_type": "Daily", "salary_rate": 500},
    {"name": "สมศรี สุขใจ", "position": "Housekeeping", "hire_date": "2022-11-10",
     "salary_type": "Daily", "salary_rate": 480, "status": "Inactive", "termination_date": "2024-05-31"},
]


def _add(store, action, params):
    result = store.execute(action, params)
    if not result["success"]:
        raise RuntimeError(f"{action} failed: {result['message']}")
    return result["data"]


def init_rooms(store):
    rooms = {}
    for numbers, room_type, price in ROOM_LAYOUT:
        for number in numbers:
            room = _add(store, "addRoom", {"number": number, "type": room_type, "price": price})
            rooms[number] = room
    print(f"  rooms: {len(rooms)}")
    return rooms


def init_employees(store):
    employees = [_add(store, "addEmployee", employee) for employee in EMPLOYEES]
    print(f"  employees: {len(employees)}")
    return employees


def init_tenant(store, rooms):
    room = rooms["A204"]
    tenant = _add(store, "addTenant", {
        "name": "จอห์น โด", "phone": "091-111-1111", "room_id": room["id"],
        "contract_start_date": "2024-01-01", "contract_end_date": "2024-12-31", "monthly_rent": 15000,
    })
    _add(store, "updateRoom", {"id": room["id"], "status": "Monthly Rental"})
    print(f"  tenant: {tenant['id']} in {room['number']}")


def init_bookings(store, rooms):
    today = date.today()
    stays = [
        ("ฐานุเดช", "081-234-5678", "A101", -1, 2, "Check-In"),
        ("สมศรี", "082-345-6789", "A104", 0, 1, "Check-In"),
        ("ปีเตอร์ โจนส์", "083-456-7890", "A106", 3, 5, "Confirmed"),
        ("ศิริพร", "084-567-8901", "A102", -1, 0, "Check-Out"),
    ]
    for name, phone, number, start, end, status in stays:
        room = rooms[number]
        guest = _add(store, "addGuest", {"name": name, "phone": phone, "history": []})
        check_in = today + timedelta(days=start)
        check_out = today + timedelta(days=end)
        booking = _add(store, "addBooking", {
            "guest_id": guest["id"], "room_id": room["id"],
            "check_in_date": check_in.isoformat(), "check_out_date": check_out.isoformat(),
            "status": status, "total_price": float(room["price"]) * (end - start),
        })
        _add(store, "updateGuest", {"id": guest["id"], "history": [booking["id"]]})
    print(f"  bookings: {len(stays)}")


def init_expenses(store):
    today = date.today()
    expenses = [
        (today - timedelta(days=2), "Utilities", "Electricity Bill", 5500),
        (today - timedelta(days=1), "Supplies", "Cleaning Supplies", 1200),
        (today, "Maintenance", "Fix Air Conditioner Room A103", 800),
    ]
    for expense_date, category, description, amount in expenses:
        _add(store, "addExpense", {
            "expense_date": expense_date.isoformat(), "category": category,
            "description": description, "amount": amount,
        })
    print(f"  expenses: {len(expenses)}")


def reset_data():
    """Drop and recreate every table"""
    Base.metadata.drop_all(bind=engine)
    init_db()


def main():
    print("=" * 50)
    print("VIPAT HMS seed data")
    print("=" * 50)

    if "--reset" in sys.argv:
        reset_data()
        print("Tables reset")
    else:
        init_db()

    store = SheetStore(SessionLocal)
    existing = store.execute("getRooms")
    if existing["success"] and existing["data"]:
        print("Rooms already present, nothing to do (use --reset to start over)")
        return

    rooms = init_rooms(store)
    init_employees(store)
    init_tenant(store, rooms)
    init_bookings(store, rooms)
    init_expenses(store)
    print("Done")


if __name__ == '__main__':
    main()
