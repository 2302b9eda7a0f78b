"""
Report service - figures for the dashboard and the finance reports
"""
from datetime import date, timedelta
from decimal import Decimal
from typing import List, Optional

from hms.models.enums import BookingStatus, RoomStatus
from hms.models.schemas import CategoryTotal, DashboardStats, MonthlyFinance
from hms.services.app_state import AppState


class ReportService:
    """Report service"""

    def __init__(self, state: AppState):
        self.state = state

    def _live_bookings(self):
        return [b for b in self.state.bookings if b.status != BookingStatus.CANCELLED]

    def get_dashboard_stats(self, today: Optional[date] = None) -> DashboardStats:
        today = today or date.today()
        rooms = self.state.rooms
        total_rooms = len(rooms)

        def count(status):
            return len([r for r in rooms if r.status == status])

        bookings = self._live_bookings()
        arrivals = len([b for b in bookings if b.check_in_date == today])
        departures = len([b for b in bookings if b.check_out_date == today])

        # Rooms with a stay covering tonight
        occupied_ids = {b.room_id for b in bookings if b.check_in_date <= today < b.check_out_date}
        occupancy_rate = (len(occupied_ids) / total_rooms * 100) if total_rooms > 0 else 0

        month_revenue = sum(
            (b.total_price for b in bookings
             if b.check_in_date.year == today.year and b.check_in_date.month == today.month),
            Decimal("0"),
        )
        month_expenses = sum(
            (e.amount for e in self.state.expenses
             if e.expense_date.year == today.year and e.expense_date.month == today.month),
            Decimal("0"),
        )

        return DashboardStats(
            total_rooms=total_rooms,
            available=count(RoomStatus.AVAILABLE),
            occupied=count(RoomStatus.OCCUPIED),
            cleaning=count(RoomStatus.CLEANING),
            monthly_rental=count(RoomStatus.MONTHLY_RENTAL),
            today_arrivals=arrivals,
            today_departures=departures,
            occupancy_rate=round(occupancy_rate, 1),
            month_revenue=month_revenue,
            month_expenses=month_expenses,
        )

    def get_monthly_finance(self, year: int) -> List[MonthlyFinance]:
        """Booking revenue (by check-in month) against expenses, January to December"""
        revenue = {month: Decimal("0") for month in range(1, 13)}
        expenses = {month: Decimal("0") for month in range(1, 13)}

        for booking in self._live_bookings():
            if booking.check_in_date.year == year:
                revenue[booking.check_in_date.month] += booking.total_price
        for expense in self.state.expenses:
            if expense.expense_date.year == year:
                expenses[expense.expense_date.month] += expense.amount

        return [
            MonthlyFinance(
                month=month,
                revenue=revenue[month],
                expenses=expenses[month],
                net=revenue[month] - expenses[month],
            )
            for month in range(1, 13)
        ]

    def get_expenses_by_category(self, start_date: date, end_date: date) -> List[CategoryTotal]:
        totals = {}
        for expense in self.state.expenses:
            if start_date <= expense.expense_date <= end_date:
                total, count = totals.get(expense.category, (Decimal("0"), 0))
                totals[expense.category] = (total + expense.amount, count + 1)

        result = [
            CategoryTotal(category=category, total=total, count=count)
            for category, (total, count) in totals.items()
        ]
        return sorted(result, key=lambda c: c.total, reverse=True)

    def get_occupancy_report(self, start_date: date, end_date: date) -> List[dict]:
        """Booked rooms per night in the range"""
        result = []
        total_rooms = len(self.state.rooms)
        bookings = self._live_bookings()
        current = start_date
        while current <= end_date:
            occupied = len({b.room_id for b in bookings if b.check_in_date <= current < b.check_out_date})
            rate = (occupied / total_rooms * 100) if total_rooms > 0 else 0
            result.append({
                "date": current.isoformat(),
                "occupied_rooms": occupied,
                "total_rooms": total_rooms,
                "occupancy_rate": round(rate, 1),
            })
            current += timedelta(days=1)
        return result
