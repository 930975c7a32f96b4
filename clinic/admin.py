"""
Django admin registrations for the clinic models.

Staff ``User`` rows are normally created with the ``register_staff``
command; the admin is handy for inspecting data during development.
Bed occupancy and admission status should be changed through the API so
the bed/admission pairing stays consistent.
"""

from django.contrib import admin

from .models import Admission, Appointment, Bed, InventoryItem, Patient, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('id', 'email', 'first_name', 'last_name', 'role')
    list_filter = ('role',)
    search_fields = ('id', 'email', 'last_name')


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('mrn', 'last_name', 'first_name', 'date_of_birth', 'gender')
    search_fields = ('mrn', 'first_name', 'last_name', 'contact_number')


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('date', 'time', 'queue_number', 'patient', 'doctor', 'status', 'type')
    list_filter = ('status', 'type', 'date')


@admin.register(Bed)
class BedAdmin(admin.ModelAdmin):
    list_display = ('bed_number', 'ward', 'status', 'patient')
    list_filter = ('ward', 'status')
    readonly_fields = ('status', 'patient', 'admission_date', 'expected_discharge_date')


@admin.register(Admission)
class AdmissionAdmin(admin.ModelAdmin):
    list_display = ('patient', 'bed', 'doctor', 'admission_date', 'discharge_date', 'status')
    list_filter = ('status',)
    readonly_fields = ('status', 'bed', 'patient')


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    list_display = ('name', 'category', 'quantity', 'reorder_level', 'unit', 'expiry_date')
    list_filter = ('category',)
    search_fields = ('name', 'supplier')
