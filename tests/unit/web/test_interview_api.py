#!/usr/bin/env python3
"""
HTTP tests for interview scheduling and transitions.
"""

import unittest
import uuid

from tests import make_candidate, make_practice, make_interview
from tests.api import ApiTestCase


class TestInterviewApi(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.candidate = make_candidate(self.db, "Jane Candidate")
        self.practice = make_practice(self.db, "Smile Dental")
        self.db.commit()

    def schedule(self, **overrides):
        body = {
            "candidateUserId": str(self.candidate.id),
            "meetingType": "Video",
            "location": "Online",
            "date": "2026-03-01",
            "time": "10:00",
            "notes": "Bring your GDC number",
        }
        body.update(overrides)
        return self.client.post("/interview", json=body, headers=self.auth(self.practice))

    def test_full_lifecycle(self):
        created = self.schedule()
        self.assertEqual(created.status_code, 201)
        self.assertEqual(created.json()['message'], "Interview scheduled successfully")
        interview = created.json()['interview']
        self.assertEqual(interview['status'], "scheduled")
        interview_id = interview['id']

        requested = self.client.post(
            f"/interview/{interview_id}/reschedule-request",
            json={"requestedDate": "2026-03-04", "requestedTime": "14:30", "reason": "Clinic shift"},
            headers=self.auth(self.candidate),
        )
        self.assertEqual(requested.status_code, 200)
        self.assertTrue(requested.json()['interview']['rescheduleRequested'])

        approved = self.client.put(f"/interview/{interview_id}/reschedule", headers=self.auth(self.practice))
        self.assertEqual(approved.status_code, 200)
        approved_interview = approved.json()['interview']
        self.assertEqual(approved_interview['date'], "2026-03-04")
        self.assertEqual(approved_interview['time'], "14:30")
        self.assertFalse(approved_interview['rescheduleRequested'])

        accepted = self.client.post(f"/interview/{interview_id}/accept", headers=self.auth(self.candidate))
        self.assertEqual(accepted.json()['interview']['status'], "confirmed")

        again = self.client.post(f"/interview/{interview_id}/accept", headers=self.auth(self.candidate))
        self.assertEqual(again.status_code, 200)
        self.assertEqual(again.json()['interview']['status'], "confirmed")

        completed = self.client.post(f"/interview/{interview_id}/complete", headers=self.auth(self.practice))
        self.assertEqual(completed.json()['interview']['status'], "completed")

        permitted = self.client.get(
            f"/match/can-message/{self.practice.id}", headers=self.auth(self.candidate)
        ).json()
        self.assertTrue(permitted['permitted'])

    def test_candidate_cannot_schedule(self):
        response = self.client.post(
            "/interview",
            json={"candidateUserId": str(self.candidate.id), "meetingType": "Video",
                  "location": "Online", "date": "2026-03-01", "time": "10:00"},
            headers=self.auth(self.candidate),
        )

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()['error'], "Only practices can schedule interviews")

    def test_candidate_with_malformed_body_is_forbidden(self):
        response = self.client.post(
            "/interview", json={"candidateUserId": "not-a-uuid"}, headers=self.auth(self.candidate)
        )

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()['error'], "Only practices can schedule interviews")

    def test_candidate_cannot_use_practice_actions(self):
        interview = make_interview(self.db, self.practice, self.candidate)
        self.db.commit()

        for interview_id in (interview.id, uuid.uuid4()):
            approve = self.client.put(
                f"/interview/{interview_id}/reschedule",
                json={"date": "2026-04-01", "time": "09:00"},
                headers=self.auth(self.candidate),
            )
            self.assertEqual(approve.status_code, 403)

            complete = self.client.post(f"/interview/{interview_id}/complete", headers=self.auth(self.candidate))
            self.assertEqual(complete.status_code, 403)

    def test_practice_cannot_use_candidate_actions(self):
        response = self.client.post(f"/interview/{uuid.uuid4()}/decline", headers=self.auth(self.practice))
        self.assertEqual(response.status_code, 403)

    def test_missing_fields(self):
        response = self.schedule(meetingType=None, location=None)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['error'], "Missing required fields: meetingType, location")

    def test_bad_time(self):
        response = self.schedule(time="7pm")
        self.assertEqual(response.status_code, 400)

    def test_unknown_candidate(self):
        response = self.schedule(candidateUserId=str(uuid.uuid4()))

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['error'], "Candidate not found")

    def test_approve_without_request(self):
        interview = make_interview(self.db, self.practice, self.candidate)
        self.db.commit()

        response = self.client.put(
            f"/interview/{interview.id}/reschedule",
            json={"date": "2026-04-01", "time": "09:00"},
            headers=self.auth(self.practice),
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['error'], "No pending reschedule request")

    def test_decline_then_decline_again(self):
        interview = make_interview(self.db, self.practice, self.candidate)
        self.db.commit()

        first = self.client.post(
            f"/interview/{interview.id}/decline", json={"reason": "Accepted another offer"},
            headers=self.auth(self.candidate),
        )
        self.assertEqual(first.status_code, 200)
        body = first.json()['interview']
        self.assertTrue(body['declined'])
        self.assertEqual(body['status'], "cancelled")
        self.assertEqual(body['declineReason'], "Accepted another offer")

        second = self.client.post(f"/interview/{interview.id}/decline", headers=self.auth(self.candidate))
        self.assertEqual(second.status_code, 400)
        self.assertEqual(second.json()['error'], "Interview already declined")

    def test_declined_interview_stays_cancelled(self):
        interview = make_interview(self.db, self.practice, self.candidate)
        self.db.commit()
        interview_id = interview.id

        self.client.post(
            f"/interview/{interview_id}/reschedule-request",
            json={"requestedDate": "2026-03-04", "requestedTime": "14:30"},
            headers=self.auth(self.candidate),
        )
        declined = self.client.post(f"/interview/{interview_id}/decline", headers=self.auth(self.candidate))
        self.assertFalse(declined.json()['interview']['rescheduleRequested'])

        approved = self.client.put(f"/interview/{interview_id}/reschedule", headers=self.auth(self.practice))
        self.assertEqual(approved.status_code, 400)

        mine = self.client.get("/interview/candidate", headers=self.auth(self.candidate)).json()
        self.assertEqual(mine['interviews'][0]['status'], "cancelled")
        self.assertTrue(mine['interviews'][0]['declined'])

    def test_other_candidate_forbidden(self):
        interview = make_interview(self.db, self.practice, self.candidate)
        stranger = make_candidate(self.db, "Stranger")
        self.db.commit()

        response = self.client.post(f"/interview/{interview.id}/accept", headers=self.auth(stranger))
        self.assertEqual(response.status_code, 403)

    def test_unknown_interview(self):
        response = self.client.post(f"/interview/{uuid.uuid4()}/accept", headers=self.auth(self.candidate))

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['error'], "Interview not found")

    def test_my_interviews_by_role(self):
        make_interview(self.db, self.practice, self.candidate, date="2026-03-02")
        make_interview(self.db, self.practice, self.candidate, date="2026-03-01")
        self.db.commit()

        mine = self.client.get("/interview", headers=self.auth(self.candidate)).json()
        self.assertEqual(mine['role'], "candidate")
        self.assertEqual(mine['count'], 2)
        self.assertEqual([i['date'] for i in mine['interviews']], ["2026-03-01", "2026-03-02"])
        self.assertEqual(mine['interviews'][0]['practice']['name'], "Smile Dental")
        self.assertEqual(mine['interviews'][0]['practice']['clinicType'], "General")
        self.assertIsNone(mine['interviews'][0]['candidate'])

        theirs = self.client.get("/interview", headers=self.auth(self.practice)).json()
        self.assertEqual(theirs['role'], "practice")
        self.assertEqual(theirs['interviews'][0]['candidate']['fullName'], "Jane Candidate")

    def test_role_specific_lists(self):
        make_interview(self.db, self.practice, self.candidate)
        self.db.commit()

        as_candidate = self.client.get("/interview/candidate", headers=self.auth(self.candidate))
        self.assertEqual(as_candidate.status_code, 200)
        self.assertEqual(as_candidate.json()['count'], 1)

        wrong_role = self.client.get("/interview/practice", headers=self.auth(self.candidate))
        self.assertEqual(wrong_role.status_code, 403)

    def test_requires_auth(self):
        self.assertEqual(self.client.get("/interview").status_code, 401)


if __name__ == '__main__':
    unittest.main()
