"""
Tests for the booking write path and the active-booking uniqueness index.
"""
import threading
from unittest.mock import patch

import pytest
from django.db import IntegrityError, connection, transaction
from django.db.models.query import QuerySet

from appointments.models import Appointment, AppointmentStatus
from appointments.services import book_appointment, set_status
from appointments.slots import available_slots
from user.services import create_user
from utils.exceptions import NotFound, SlotUnavailable

pytestmark = pytest.mark.django_db


class TestBookAppointment:

    def test_creates_pending_appointment(self, doctor, patient, next_monday):
        appointment = book_appointment(patient, doctor.user_id, next_monday, '09:30',
                                       symptoms='Chest pain', documents=['uploads/documents/a.pdf'])

        assert appointment.status == AppointmentStatus.PENDING
        assert appointment.active_slot is True
        assert appointment.doctor_id == doctor.user_id
        assert appointment.patient_id == patient.id
        assert appointment.documents == ['uploads/documents/a.pdf']
        assert appointment.symptoms == 'Chest pain'

    def test_second_booking_of_same_slot_is_rejected(self, doctor, patient, other_patient, next_monday):
        book_appointment(patient, doctor.user_id, next_monday, '09:30')

        with pytest.raises(SlotUnavailable):
            book_appointment(other_patient, doctor.user_id, next_monday, '09:30')

        assert Appointment.objects.filter(doctor=doctor.user, time_slot='09:30').count() == 1

    def test_lost_race_is_reported_as_slot_unavailable(self, doctor, patient, other_patient, next_monday):
        book_appointment(patient, doctor.user_id, next_monday, '10:00')

        # Simulate a concurrent request whose pre-check ran before the first insert committed.
        with patch.object(QuerySet, 'exists', return_value=False):
            with pytest.raises(SlotUnavailable):
                book_appointment(other_patient, doctor.user_id, next_monday, '10:00')

        assert Appointment.objects.filter(doctor=doctor.user, time_slot='10:00').count() == 1

    def test_slot_outside_template_is_rejected(self, doctor, patient, next_monday):
        with pytest.raises(SlotUnavailable):
            book_appointment(patient, doctor.user_id, next_monday, '11:00')
        with pytest.raises(SlotUnavailable):
            book_appointment(patient, doctor.user_id, next_monday, '09:15')

    def test_day_without_template_is_rejected(self, doctor, patient, next_tuesday):
        with pytest.raises(SlotUnavailable):
            book_appointment(patient, doctor.user_id, next_tuesday, '09:00')

    def test_unapproved_doctor_cannot_be_booked(self, pending_doctor, patient, next_monday):
        with pytest.raises(NotFound):
            book_appointment(patient, pending_doctor.user_id, next_monday, '09:00')

    def test_unknown_doctor_cannot_be_booked(self, patient, next_monday):
        with pytest.raises(NotFound):
            book_appointment(patient, 999999, next_monday, '09:00')

    def test_book_cancel_rebook_scenario(self, doctor, patient, other_patient, next_monday):
        assert available_slots(doctor, next_monday) == ['09:00', '09:30', '10:00', '10:30']

        appointment = book_appointment(patient, doctor.user_id, next_monday, '09:30')
        assert available_slots(doctor, next_monday) == ['09:00', '10:00', '10:30']

        set_status(appointment.id, AppointmentStatus.CANCELLED, patient)
        assert available_slots(doctor, next_monday) == ['09:00', '09:30', '10:00', '10:30']

        rebooked = book_appointment(other_patient, doctor.user_id, next_monday, '09:30')
        assert rebooked.status == AppointmentStatus.PENDING


class TestActiveBookingIndex:

    def _create(self, patient, doctor, day, status=AppointmentStatus.PENDING):
        return Appointment.objects.create(patient=patient, doctor=doctor.user, appointment_date=day,
                                          time_slot='09:00', status=status)

    def test_two_active_bookings_collide(self, doctor, patient, other_patient, next_monday):
        self._create(patient, doctor, next_monday)
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                self._create(other_patient, doctor, next_monday, AppointmentStatus.CONFIRMED)

    def test_inactive_bookings_do_not_collide(self, doctor, patient, other_patient, next_monday):
        self._create(patient, doctor, next_monday, AppointmentStatus.CANCELLED)
        self._create(other_patient, doctor, next_monday, AppointmentStatus.CANCELLED)
        self._create(patient, doctor, next_monday, AppointmentStatus.COMPLETED)
        active = self._create(other_patient, doctor, next_monday)

        assert active.active_slot is True
        assert Appointment.objects.filter(active_slot__isnull=True).count() == 3

    def test_status_change_clears_active_marker(self, doctor, patient, next_monday):
        appointment = self._create(patient, doctor, next_monday)
        appointment.status = AppointmentStatus.CANCELLED
        appointment.save(update_fields=['status'])

        appointment.refresh_from_db()
        assert appointment.active_slot is None


class TestConcurrentBooking:
    """N simultaneous requests for one slot: exactly one commits."""

    ATTEMPTS = 5

    def _patients(self):
        return [
            create_user(name=f'Racer {i}', email=f'racer{i}@example.com', password='secret123')
            for i in range(self.ATTEMPTS)
        ]

    def test_every_request_passing_the_check_still_commits_once(self, doctor, next_monday):
        outcomes = []
        # Every request sees an empty slot, as if all pre-checks ran before any insert.
        with patch.object(QuerySet, 'exists', return_value=False):
            for patient in self._patients():
                try:
                    book_appointment(patient, doctor.user_id, next_monday, '10:30')
                    outcomes.append('booked')
                except SlotUnavailable:
                    outcomes.append('unavailable')

        assert outcomes.count('booked') == 1
        assert outcomes.count('unavailable') == self.ATTEMPTS - 1
        assert Appointment.objects.filter(doctor=doctor.user, time_slot='10:30').count() == 1

    @pytest.mark.django_db(transaction=True)
    def test_threads_racing_for_one_slot(self, doctor, next_monday):
        if connection.vendor == 'sqlite':
            pytest.skip('SQLite serialises writers behind a database-wide lock; run with TEST_DB_ENGINE')

        patients = self._patients()
        barrier = threading.Barrier(len(patients))
        outcomes = []

        def attempt(patient):
            barrier.wait()
            try:
                book_appointment(patient, doctor.user_id, next_monday, '10:30')
                outcome = 'booked'
            except SlotUnavailable:
                outcome = 'unavailable'
            finally:
                connection.close()
            outcomes.append(outcome)

        threads = [threading.Thread(target=attempt, args=(patient,)) for patient in patients]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert outcomes.count('booked') == 1
        assert outcomes.count('unavailable') == self.ATTEMPTS - 1
        assert Appointment.objects.filter(doctor=doctor.user, time_slot='10:30').count() == 1
