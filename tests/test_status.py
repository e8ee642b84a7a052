"""
Tests for the appointment status machine and who may drive it.
"""
import pytest

from appointments.models import Appointment, AppointmentStatus
from appointments.services import TRANSITIONS, book_appointment, set_status
from utils.exceptions import Forbidden, InvalidTransition, NotFound

pytestmark = pytest.mark.django_db

PENDING = AppointmentStatus.PENDING
CONFIRMED = AppointmentStatus.CONFIRMED
CANCELLED = AppointmentStatus.CANCELLED
COMPLETED = AppointmentStatus.COMPLETED


@pytest.fixture
def appointment(doctor, patient, next_monday):
    return book_appointment(patient, doctor.user_id, next_monday, '09:00')


def _force_status(appointment, status):
    appointment.status = status
    appointment.save()
    return appointment


class TestTransitionTable:

    @pytest.mark.parametrize('start,target', [
        (PENDING, CONFIRMED),
        (PENDING, CANCELLED),
        (CONFIRMED, COMPLETED),
        (CONFIRMED, CANCELLED),
    ])
    def test_allowed_transitions_succeed(self, appointment, doctor, start, target):
        _force_status(appointment, start)

        updated = set_status(appointment.id, target, doctor.user)

        assert updated.status == target
        assert Appointment.objects.get(pk=appointment.id).status == target

    @pytest.mark.parametrize('start', [CANCELLED, COMPLETED])
    @pytest.mark.parametrize('target', [PENDING, CONFIRMED, CANCELLED, COMPLETED])
    def test_terminal_states_reject_everything(self, appointment, doctor, start, target):
        _force_status(appointment, start)

        with pytest.raises(InvalidTransition):
            set_status(appointment.id, target, doctor.user)

        assert Appointment.objects.get(pk=appointment.id).status == start

    def test_pending_cannot_jump_to_completed(self, appointment, doctor):
        with pytest.raises(InvalidTransition):
            set_status(appointment.id, COMPLETED, doctor.user)

    def test_nobody_can_move_back_to_pending(self, appointment, doctor):
        _force_status(appointment, CONFIRMED)
        with pytest.raises(Forbidden):
            set_status(appointment.id, PENDING, doctor.user)

    @pytest.mark.parametrize('start', [CANCELLED, COMPLETED])
    def test_admin_gets_invalid_transition_on_terminal_state(self, appointment, admin_user, start):
        _force_status(appointment, start)
        with pytest.raises(InvalidTransition):
            set_status(appointment.id, COMPLETED, admin_user)

    def test_patient_gets_invalid_transition_on_cancelled_appointment(self, appointment, patient):
        _force_status(appointment, CANCELLED)
        with pytest.raises(InvalidTransition):
            set_status(appointment.id, CANCELLED, patient)

    def test_terminal_state_still_checks_ownership_first(self, appointment, other_doctor):
        _force_status(appointment, COMPLETED)
        with pytest.raises(Forbidden):
            set_status(appointment.id, PENDING, other_doctor.user)

    def test_terminal_states_have_no_exits(self):
        assert TRANSITIONS[CANCELLED] == set()
        assert TRANSITIONS[COMPLETED] == set()

    def test_updated_at_is_refreshed(self, appointment, doctor):
        before = appointment.updated_at
        updated = set_status(appointment.id, CONFIRMED, doctor.user)
        assert updated.updated_at >= before


class TestStatusRights:

    def test_patient_cancels_own_pending_appointment(self, appointment, patient):
        assert set_status(appointment.id, CANCELLED, patient).status == CANCELLED

    def test_patient_cannot_touch_someone_elses_appointment(self, appointment, other_patient):
        with pytest.raises(Forbidden):
            set_status(appointment.id, CANCELLED, other_patient)

    def test_patient_cannot_confirm(self, appointment, patient):
        with pytest.raises(Forbidden):
            set_status(appointment.id, CONFIRMED, patient)

    def test_patient_cannot_cancel_confirmed_appointment(self, appointment, patient):
        _force_status(appointment, CONFIRMED)
        with pytest.raises(Forbidden):
            set_status(appointment.id, CANCELLED, patient)

    def test_doctor_must_be_the_doctor_party(self, appointment, other_doctor):
        with pytest.raises(Forbidden):
            set_status(appointment.id, CONFIRMED, other_doctor.user)

    def test_doctor_can_record_notes(self, appointment, doctor):
        updated = set_status(appointment.id, CONFIRMED, doctor.user, notes='Bring previous ECG')
        assert updated.notes == 'Bring previous ECG'

    def test_patient_notes_are_ignored(self, appointment, patient):
        updated = set_status(appointment.id, CANCELLED, patient, notes='changed my mind')
        assert updated.notes == ''

    def test_admin_confirms_and_cancels(self, appointment, admin_user):
        assert set_status(appointment.id, CONFIRMED, admin_user).status == CONFIRMED
        assert set_status(appointment.id, CANCELLED, admin_user).status == CANCELLED

    def test_admin_cannot_complete(self, appointment, admin_user):
        _force_status(appointment, CONFIRMED)
        with pytest.raises(Forbidden):
            set_status(appointment.id, COMPLETED, admin_user)

    def test_unknown_appointment(self, doctor):
        with pytest.raises(NotFound):
            set_status(424242, CONFIRMED, doctor.user)

    def test_completion_frees_slot_marker(self, appointment, doctor):
        set_status(appointment.id, CONFIRMED, doctor.user)
        completed = set_status(appointment.id, COMPLETED, doctor.user)
        assert completed.active_slot is None
