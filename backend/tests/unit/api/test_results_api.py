"""
Unit Tests for Result endpoints
"""
from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.result import Result
from app.models.user import Department, User, UserRole
from app.services.result_service import ResultService


async def create_exam(client: AsyncClient, headers: dict, department: str = None) -> str:
    payload = {
        'examName': 'Unit Test 1',
        'subjects': [{'subjectName': 'Accounts', 'date': '2024-05-02', 'time': '09:30'}],
        'examSchedule': {'startDate': '2024-05-01', 'endDate': '2024-05-05'},
    }
    if department:
        payload['department'] = department
    response = await client.post('/api/v1/exams', headers=headers, json=payload)
    return response.json()['exam']['_id']


class TestRecordResult:

    @pytest.mark.asyncio
    @pytest.mark.parametrize('marks,status', [(39, 'fail'), (39.5, 'fail'), (40, 'pass'), (100, 'pass')])
    async def test_pass_mark_boundary(self, client: AsyncClient, admin_headers: dict,
                                      student: User, marks, status):
        exam_id = await create_exam(client, admin_headers)

        response = await client.post('/api/v1/results', headers=admin_headers, json={
            'studentId': student.id, 'examId': exam_id, 'subject': 'Accounts', 'marks': marks,
        })

        assert response.status_code == 201
        assert response.json()['result']['status'] == status

    @pytest.mark.asyncio
    async def test_rerecording_updates_same_result(self, client: AsyncClient, teacher: User,
                                                   student: User, headers_for):
        headers = headers_for(teacher)
        exam_id = await create_exam(client, headers)
        payload = {'studentId': student.id, 'examId': exam_id, 'subject': 'Accounts', 'marks': 35}

        first = await client.post('/api/v1/results', headers=headers, json=payload)
        second = await client.post('/api/v1/results', headers=headers, json={**payload, 'marks': 72})

        assert first.status_code == 201
        assert second.status_code == 200
        assert first.json()['result']['_id'] == second.json()['result']['_id']
        assert second.json()['result']['marks'] == 72
        assert second.json()['result']['status'] == 'pass'

    @pytest.mark.asyncio
    async def test_concurrent_first_record_conflicts(self, client: AsyncClient, db_session: AsyncSession,
                                                     admin_headers: dict, student: User):
        exam_id = await create_exam(client, admin_headers)
        payload = {'studentId': student.id, 'examId': exam_id, 'subject': 'Accounts', 'marks': 55}
        await client.post('/api/v1/results', headers=admin_headers, json=payload)

        with patch.object(ResultService, 'find', AsyncMock(return_value=None)):
            response = await client.post('/api/v1/results', headers=admin_headers, json={**payload, 'marks': 20})

        assert response.status_code == 409
        assert response.json()['code'] == 'CONFLICT'

        marks = (await db_session.scalars(select(Result.marks).where(Result.exam_id == exam_id))).all()
        assert marks == [55]

    @pytest.mark.asyncio
    async def test_teacher_cannot_grade_other_department_student(self, client: AsyncClient, teacher: User,
                                                                 make_user, headers_for):
        headers = headers_for(teacher)
        outsider = await make_user(UserRole.STUDENT, Department.BCOM)
        exam_id = await create_exam(client, headers)

        response = await client.post('/api/v1/results', headers=headers, json={
            'studentId': outsider.id, 'examId': exam_id, 'subject': 'Accounts', 'marks': 50,
        })

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_teacher_cannot_grade_invisible_exam(self, client: AsyncClient, admin_headers: dict,
                                                       teacher: User, student: User, headers_for):
        exam_id = await create_exam(client, admin_headers, department='BA')

        response = await client.post('/api/v1/results', headers=headers_for(teacher), json={
            'studentId': student.id, 'examId': exam_id, 'subject': 'Accounts', 'marks': 50,
        })

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_result_for_non_student(self, client: AsyncClient, admin_headers: dict, teacher: User):
        exam_id = await create_exam(client, admin_headers)

        response = await client.post('/api/v1/results', headers=admin_headers, json={
            'studentId': teacher.id, 'examId': exam_id, 'subject': 'Accounts', 'marks': 50,
        })

        assert response.status_code == 404
        assert response.json()['message'] == 'Student not found'

    @pytest.mark.asyncio
    async def test_result_for_missing_exam(self, client: AsyncClient, admin_headers: dict, student: User):
        response = await client.post('/api/v1/results', headers=admin_headers, json={
            'studentId': student.id, 'examId': 'missing', 'subject': 'Accounts', 'marks': 50,
        })

        assert response.status_code == 404
        assert response.json()['message'] == 'Exam not found'

    @pytest.mark.asyncio
    async def test_marks_above_hundred(self, client: AsyncClient, admin_headers: dict, student: User):
        exam_id = await create_exam(client, admin_headers)

        response = await client.post('/api/v1/results', headers=admin_headers, json={
            'studentId': student.id, 'examId': exam_id, 'subject': 'Accounts', 'marks': 101,
        })

        assert response.status_code == 400


class TestReadResults:

    @pytest.mark.asyncio
    async def test_student_sees_only_own(self, client: AsyncClient, admin_headers: dict,
                                         make_user, headers_for):
        me = await make_user(UserRole.STUDENT, Department.BCA)
        classmate = await make_user(UserRole.STUDENT, Department.BCA)
        exam_id = await create_exam(client, admin_headers)
        recorded = {}
        for user in (me, classmate):
            response = await client.post('/api/v1/results', headers=admin_headers, json={
                'studentId': user.id, 'examId': exam_id, 'subject': 'Accounts', 'marks': 60,
            })
            recorded[user.id] = response.json()['result']['_id']

        listing = await client.get('/api/v1/results', headers=headers_for(me),
                                   params={'studentId': classmate.id})
        other = await client.get(f'/api/v1/results/{recorded[classmate.id]}', headers=headers_for(me))

        assert [r['studentId']['_id'] for r in listing.json()['results']] == [me.id]
        assert other.status_code == 403

    @pytest.mark.asyncio
    async def test_staff_see_department_students(self, client: AsyncClient, admin_headers: dict,
                                                 teacher: User, make_user, headers_for):
        mine = await make_user(UserRole.STUDENT, Department.BCA)
        other = await make_user(UserRole.STUDENT, Department.BA)
        exam_id = await create_exam(client, admin_headers)
        for user in (mine, other):
            await client.post('/api/v1/results', headers=admin_headers, json={
                'studentId': user.id, 'examId': exam_id, 'subject': 'Accounts', 'marks': 60,
            })

        response = await client.get('/api/v1/results', headers=headers_for(teacher),
                                    params={'examId': exam_id})

        results = response.json()['results']
        assert [r['studentId']['_id'] for r in results] == [mine.id]
        assert results[0]['examId']['_id'] == exam_id


class TestDeleteResults:

    @pytest.mark.asyncio
    async def test_teacher_cannot_delete(self, client: AsyncClient, teacher: User,
                                         student: User, headers_for):
        headers = headers_for(teacher)
        exam_id = await create_exam(client, headers)
        created = await client.post('/api/v1/results', headers=headers, json={
            'studentId': student.id, 'examId': exam_id, 'subject': 'Accounts', 'marks': 60,
        })

        response = await client.delete(f"/api/v1/results/{created.json()['result']['_id']}", headers=headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_hod_deletes(self, client: AsyncClient, hod: User, student: User, headers_for):
        headers = headers_for(hod)
        exam_id = await create_exam(client, headers)
        created = await client.post('/api/v1/results', headers=headers, json={
            'studentId': student.id, 'examId': exam_id, 'subject': 'Accounts', 'marks': 60,
        })
        result_id = created.json()['result']['_id']

        response = await client.delete(f'/api/v1/results/{result_id}', headers=headers)
        missing = await client.get(f'/api/v1/results/{result_id}', headers=headers)

        assert response.status_code == 200
        assert missing.status_code == 404
