"""Clinic application for the MediConnect backend.

Models, request serializers, services and views for patients,
appointments, beds, admissions, inventory and the staff dashboard.
"""
