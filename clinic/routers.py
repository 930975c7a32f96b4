"""
URL mappings for the MediConnect API.

Every resource lives under ``/api/`` without trailing slashes.  Fixed
sub-paths (``today``, ``available``, ``low-stock`` ...) are listed before
the ``<pk>`` routes so they are not captured as ids.
"""
from django.urls import include, path

from .views import admissions, appointments, beds, dashboard, health, inventory, patients, users

urlpatterns = [
    path('', health.welcome),
    path('health', health.health),
    path('', include('django_prometheus.urls')),

    path('api/patients', patients.patients),
    path('api/patients/<str:pk>/appointments', patients.patient_appointments),
    path('api/patients/<str:pk>/admissions', patients.patient_admissions),
    path('api/patients/<str:pk>', patients.patient_detail),

    path('api/appointments', appointments.appointments),
    path('api/appointments/today', appointments.appointments_today),
    path('api/appointments/<str:pk>', appointments.appointment_detail),

    path('api/beds', beds.beds),
    path('api/beds/available', beds.beds_available),
    path('api/beds/ward/<str:ward>', beds.beds_by_ward),
    path('api/beds/<str:pk>', beds.bed_detail),

    path('api/admissions', admissions.admissions),
    path('api/admissions/active', admissions.admissions_active),
    path('api/admissions/<str:pk>', admissions.admission_detail),

    path('api/inventory', inventory.inventory),
    path('api/inventory/low-stock', inventory.inventory_low_stock),
    path('api/inventory/category/<str:category>', inventory.inventory_by_category),
    path('api/inventory/<str:pk>', inventory.inventory_detail),

    path('api/users/doctors', users.doctors),
    path('api/users/me', users.me),

    path('api/dashboard/summary', dashboard.summary),
    path('api/dashboard/appointments/stats', dashboard.appointment_stats),
    path('api/dashboard/beds/stats', dashboard.bed_stats),
]
