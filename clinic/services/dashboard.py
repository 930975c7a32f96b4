"""
Read-only rollups for the dashboard.

Nothing here writes; every figure is computed from the tables at call
time.
"""
from __future__ import annotations

from datetime import timedelta

from django.db.models import Count, F
from django.utils import timezone

from clinic.models import Admission, Appointment, Bed, InventoryItem, Patient
from clinic.services.admissions import format_admission, list_admissions
from clinic.services.appointments import format_appointment

RECENT_LIMIT = 5
STATS_WINDOW_DAYS = 7


def occupancy_rate(occupied: int, total: int) -> int:
    """Percentage of beds occupied, rounded half up; 0 for an empty ward."""
    if total <= 0:
        return 0
    return int(occupied * 100 / total + 0.5)


def summary() -> dict:
    today = timezone.localdate()
    bed_counts = dict(Bed.objects.values_list('status').annotate(n=Count('id')))
    total_beds = sum(bed_counts.values())
    occupied = bed_counts.get(Bed.STATUS_OCCUPIED, 0)

    upcoming = (
        Appointment.objects.select_related('patient', 'doctor')
        .filter(date__gte=today, status__in=[Appointment.STATUS_SCHEDULED, Appointment.STATUS_IN_QUEUE])
        .order_by('date', 'time')[:RECENT_LIMIT]
    )
    return {
        'totalPatients': Patient.objects.count(),
        'totalAppointments': Appointment.objects.count(),
        'appointmentsToday': Appointment.objects.filter(date=today).count(),
        'availableBeds': bed_counts.get(Bed.STATUS_AVAILABLE, 0),
        'occupiedBeds': occupied,
        'maintenanceBeds': bed_counts.get(Bed.STATUS_MAINTENANCE, 0),
        'totalBeds': total_beds,
        'occupancyRate': occupancy_rate(occupied, total_beds),
        'lowStockItems': InventoryItem.objects.filter(quantity__lte=F('reorder_level')).count(),
        'activeAdmissions': Admission.objects.filter(status=Admission.STATUS_ACTIVE).count(),
        'recentAdmissions': [format_admission(a) for a in list_admissions()[:RECENT_LIMIT]],
        'upcomingAppointments': [format_appointment(a) for a in upcoming],
    }


def appointment_stats() -> dict:
    since = timezone.localdate() - timedelta(days=STATS_WINDOW_DAYS)
    daily = (
        Appointment.objects.filter(date__gte=since)
        .values('date').annotate(count=Count('id')).order_by('date')
    )
    by_type = Appointment.objects.values('type').annotate(count=Count('id')).order_by('type')
    by_status = Appointment.objects.values('status').annotate(count=Count('id')).order_by('status')
    return {
        'daily': [{'day': row['date'].isoformat(), 'count': row['count']} for row in daily],
        'byType': [{'type': row['type'], 'count': row['count']} for row in by_type],
        'byStatus': [{'status': row['status'], 'count': row['count']} for row in by_status],
    }


def bed_stats() -> dict:
    """Per-ward ``{total, available, occupied, maintenance}``."""
    wards: dict[str, dict] = {}
    rows = Bed.objects.values('ward', 'status').annotate(count=Count('id')).order_by('ward', 'status')
    for row in rows:
        ward = wards.setdefault(row['ward'], {'total': 0, 'available': 0, 'occupied': 0, 'maintenance': 0})
        ward[row['status'].lower()] = row['count']
        ward['total'] += row['count']
    return wards
