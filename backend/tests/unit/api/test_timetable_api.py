"""
Unit Tests for Timetable endpoints
"""
from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient

from app.models.user import Department, User, UserRole
from app.services.timetable_service import TimetableService


def slot(**overrides) -> dict:
    data = {'day': 'Monday', 'subject': 'Data Structures', 'timeSlot': '09:00-10:00', 'role': 'student'}
    data.update(overrides)
    return data


class TestTimetableUpsert:

    @pytest.mark.asyncio
    async def test_same_slot_is_updated_not_duplicated(self, client: AsyncClient, hod: User, headers_for):
        headers = headers_for(hod)

        first = await client.post('/api/v1/timetable', headers=headers, json=slot())
        second = await client.post('/api/v1/timetable', headers=headers, json=slot(subject='Algorithms'))

        assert first.status_code == 201
        assert second.status_code == 200
        assert first.json()['timetable']['_id'] == second.json()['timetable']['_id']
        assert second.json()['timetable']['subject'] == 'Algorithms'
        assert second.json()['timetable']['department'] == 'BCA'

    @pytest.mark.asyncio
    async def test_concurrent_first_write_conflicts(self, client: AsyncClient, hod: User, headers_for):
        headers = headers_for(hod)
        await client.post('/api/v1/timetable', headers=headers, json=slot())

        with patch.object(TimetableService, 'find', AsyncMock(return_value=None)):
            response = await client.post('/api/v1/timetable', headers=headers, json=slot(subject='Algorithms'))

        assert response.status_code == 409
        assert response.json()['code'] == 'CONFLICT'
        assert response.json()['message'] == 'This timetable slot was recorded concurrently, please retry'

    @pytest.mark.asyncio
    async def test_different_role_is_a_different_slot(self, client: AsyncClient, hod: User, headers_for):
        headers = headers_for(hod)

        await client.post('/api/v1/timetable', headers=headers, json=slot())
        response = await client.post('/api/v1/timetable', headers=headers, json=slot(role='teacher'))

        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_member_cannot_write_all_departments(self, client: AsyncClient, hod: User, headers_for):
        response = await client.post('/api/v1/timetable', headers=headers_for(hod), json=slot(department='all'))

        assert response.status_code == 400
        assert response.json()['message'] == 'Department must be specified for non-admin users'

    @pytest.mark.asyncio
    async def test_teacher_cannot_write(self, client: AsyncClient, teacher: User, headers_for):
        response = await client.post('/api/v1/timetable', headers=headers_for(teacher), json=slot())

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_defaults_to_all(self, client: AsyncClient, admin_headers: dict):
        response = await client.post('/api/v1/timetable', headers=admin_headers, json=slot())

        assert response.json()['timetable']['department'] == 'all'
        assert response.json()['timetable']['createdBy'] == {'_id': 'admin', 'fullName': 'Admin'}


class TestTimetableList:

    @pytest.mark.asyncio
    async def test_defaults_to_callers_role_and_week_order(self, client: AsyncClient, hod: User,
                                                           student: User, headers_for):
        headers = headers_for(hod)
        await client.post('/api/v1/timetable', headers=headers, json=slot(day='Wednesday'))
        await client.post('/api/v1/timetable', headers=headers, json=slot(day='Monday', timeSlot='11:00-12:00'))
        await client.post('/api/v1/timetable', headers=headers, json=slot(day='Monday'))
        await client.post('/api/v1/timetable', headers=headers, json=slot(role='teacher'))

        response = await client.get('/api/v1/timetable', headers=headers_for(student))

        entries = response.json()['timetable']
        assert [(e['day'], e['timeSlot']) for e in entries] == [
            ('Monday', '09:00-10:00'),
            ('Monday', '11:00-12:00'),
            ('Wednesday', '09:00-10:00'),
        ]
        assert all(e['role'] == 'student' for e in entries)

    @pytest.mark.asyncio
    async def test_shared_and_own_department_only(self, client: AsyncClient, admin_headers: dict,
                                                  student: User, headers_for):
        await client.post('/api/v1/timetable', headers=admin_headers, json=slot(subject='Shared'))
        await client.post('/api/v1/timetable', headers=admin_headers,
                          json=slot(subject='Commerce', department='BCom', day='Tuesday'))

        response = await client.get('/api/v1/timetable', headers=headers_for(student))

        assert [e['subject'] for e in response.json()['timetable']] == ['Shared']


class TestTimetableDelete:

    @pytest.mark.asyncio
    async def test_hod_cannot_delete_other_department(self, client: AsyncClient, hod: User,
                                                      make_user, headers_for):
        other_hod = await make_user(UserRole.HOD, Department.BA)
        created = await client.post('/api/v1/timetable', headers=headers_for(other_hod), json=slot())
        slot_id = created.json()['timetable']['_id']

        response = await client.delete(f'/api/v1/timetable/{slot_id}', headers=headers_for(hod))

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_delete_then_missing(self, client: AsyncClient, hod: User, headers_for):
        headers = headers_for(hod)
        created = await client.post('/api/v1/timetable', headers=headers, json=slot())
        slot_id = created.json()['timetable']['_id']

        deleted = await client.delete(f'/api/v1/timetable/{slot_id}', headers=headers)
        again = await client.delete(f'/api/v1/timetable/{slot_id}', headers=headers)

        assert deleted.status_code == 200
        assert again.status_code == 404
        assert again.json()['message'] == 'Timetable entry not found'
