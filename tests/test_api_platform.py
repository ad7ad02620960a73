from sqlalchemy import select

from mentorhub.domain import (
    Application,
    Course,
    Enrollment,
    Mentorship,
    Message,
    Notification,
    Opportunity,
    Skill,
    SkillEndorsement,
    User,
)
from tests.base import ApiTestCase, make_user

API = "/api/v1"


class CourseApiTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.instructor, self.student = self.seed(make_user(role="instructor"), make_user())
        self.course = self.seed(
            Course(instructor_id=self.instructor.id, title="SQL basics", description="Joins",
                   category="data", difficulty_level="beginner")
        )

    def test_only_instructors_create_courses(self):
        payload = {"title": "ML", "description": "Intro", "category": "data"}
        denied = self.client.post(f"{API}/courses", json=payload, headers=self.auth(self.student))
        self.assertEqual(denied.status_code, 403)

        created = self.client.post(f"{API}/courses", json=payload, headers=self.auth(self.instructor))
        self.assertEqual(created.status_code, 201)
        self.assertEqual(created.json()["data"]["instructorId"], self.instructor.id)

    def test_create_course_requires_core_fields(self):
        resp = self.client.post(
            f"{API}/courses", json={"title": "ML"}, headers=self.auth(self.instructor)
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"]["code"], "VALIDATION_ERROR")

    def test_course_detail_includes_instructor_and_enrollments(self):
        self.seed(Enrollment(user_id=self.student.id, course_id=self.course.id, progress_percentage=40))
        data = self.client.get(f"{API}/courses/{self.course.id}").json()["data"]
        self.assertEqual(data["instructorName"], self.instructor.full_name)
        self.assertEqual(data["enrollmentCount"], 1)
        self.assertEqual(data["avgProgress"], 40)

    def test_enroll_once(self):
        headers = self.auth(self.student)
        first = self.client.post(f"{API}/courses/{self.course.id}/enroll", headers=headers)
        second = self.client.post(f"{API}/courses/{self.course.id}/enroll", headers=headers)
        self.assertEqual(first.status_code, 201)
        self.assertEqual(first.json()["data"]["progressPercentage"], 0)
        self.assertEqual(second.status_code, 409)

    def test_enroll_in_unknown_course_is_404(self):
        resp = self.client.post(f"{API}/courses/999/enroll", headers=self.auth(self.student))
        self.assertEqual(resp.status_code, 404)

    def test_progress_bounds_and_completion(self):
        self.seed(Enrollment(user_id=self.student.id, course_id=self.course.id))
        headers = self.auth(self.student)
        url = f"{API}/courses/{self.course.id}/progress"

        self.assertEqual(self.client.put(url, json={"progressPercentage": 101}, headers=headers).status_code, 400)
        self.assertEqual(self.client.put(url, json={"progressPercentage": -1}, headers=headers).status_code, 400)

        done = self.client.put(url, json={"progressPercentage": 100}, headers=headers)
        self.assertEqual(done.status_code, 200)
        self.assertTrue(done.json()["data"]["completed"])
        self.assertIsNotNone(done.json()["data"]["completedAt"])

        # Re-submitting 100% does not notify again
        self.client.put(url, json={"progressPercentage": 100}, headers=headers)
        notes = self.fetch_all(select(Notification).where(Notification.type == "completion"))
        self.assertEqual(len(notes), 1)

    def test_progress_without_enrollment_is_404(self):
        resp = self.client.put(
            f"{API}/courses/{self.course.id}/progress",
            json={"progressPercentage": 10},
            headers=self.auth(self.student),
        )
        self.assertEqual(resp.status_code, 404)


class OpportunityApiTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.employer, self.other_employer, self.student = self.seed(
            make_user(role="employer"), make_user(role="employer"), make_user()
        )
        self.opportunity = self.seed(
            Opportunity(employer_id=self.employer.id, title="Backend intern", description="Python",
                        type="internship", required_skills=["programming"])
        )

    def test_create_validates_salary_range(self):
        payload = {"title": "Dev", "description": "Build", "type": "job", "salaryMin": 90, "salaryMax": 50}
        resp = self.client.post(f"{API}/opportunities", json=payload, headers=self.auth(self.employer))
        self.assertEqual(resp.status_code, 400)

        payload["salaryMax"] = 120
        resp = self.client.post(f"{API}/opportunities", json=payload, headers=self.auth(self.employer))
        self.assertEqual(resp.status_code, 201)

    def test_students_cannot_post(self):
        resp = self.client.post(
            f"{API}/opportunities",
            json={"title": "Dev", "description": "Build", "type": "job"},
            headers=self.auth(self.student),
        )
        self.assertEqual(resp.status_code, 403)

    def test_only_owner_updates(self):
        url = f"{API}/opportunities/{self.opportunity.id}"
        self.assertEqual(
            self.client.put(url, json={"title": "X"}, headers=self.auth(self.other_employer)).status_code, 403
        )
        resp = self.client.put(url, json={"isActive": False}, headers=self.auth(self.employer))
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(resp.json()["data"]["isActive"])
        self.assertEqual(resp.json()["data"]["title"], "Backend intern")

    def test_application_lifecycle(self):
        apply_url = f"{API}/opportunities/{self.opportunity.id}/applications"
        applied = self.client.post(apply_url, json={"coverLetter": "Hi"}, headers=self.auth(self.student))
        self.assertEqual(applied.status_code, 201)
        application_id = applied.json()["data"]["id"]

        again = self.client.post(apply_url, json={}, headers=self.auth(self.student))
        self.assertEqual(again.status_code, 409)

        applicants = self.client.get(
            f"{API}/opportunities/{self.opportunity.id}/applications", headers=self.auth(self.employer)
        )
        self.assertEqual(applicants.status_code, 200)
        self.assertEqual(applicants.json()["data"][0]["applicantEmail"], self.student.email)

        hidden = self.client.get(
            f"{API}/opportunities/{self.opportunity.id}/applications", headers=self.auth(self.other_employer)
        )
        self.assertEqual(hidden.status_code, 403)

        bad = self.client.put(
            f"{API}/applications/{application_id}/status", json={"status": "hired"}, headers=self.auth(self.employer)
        )
        self.assertEqual(bad.status_code, 400)

        ok = self.client.put(
            f"{API}/applications/{application_id}/status", json={"status": "accepted"}, headers=self.auth(self.employer)
        )
        self.assertEqual(ok.status_code, 200)
        self.assertEqual(ok.json()["data"]["status"], "accepted")

        mine = self.client.get(f"{API}/users/{self.student.id}/applications", headers=self.auth(self.student))
        self.assertEqual(mine.status_code, 200)
        self.assertEqual(mine.json()["data"][0]["opportunityTitle"], "Backend intern")
        self.assertEqual(mine.json()["data"][0]["employerName"], self.employer.full_name)

        others = self.client.get(f"{API}/users/{self.student.id}/applications", headers=self.auth(self.employer))
        self.assertEqual(others.status_code, 403)

        notified = self.fetch_all(select(Notification).where(Notification.user_id == self.student.id))
        self.assertEqual([n.type for n in notified], ["application"])

    def test_cannot_apply_to_inactive_opportunity(self):
        closed = self.seed(
            Opportunity(employer_id=self.employer.id, title="Closed", description="-", type="job", is_active=False)
        )
        resp = self.client.post(f"{API}/opportunities/{closed.id}/applications", json={}, headers=self.auth(self.student))
        self.assertEqual(resp.status_code, 404)


class UserApiTests(ApiTestCase):
    def test_profile_aggregates(self):
        user, peer, instructor = self.seed(make_user(bio="Hi"), make_user(), make_user(role="instructor"))
        skill = self.seed(Skill(user_id=user.id, title="Go", category="programming"))
        course = self.seed(Course(instructor_id=instructor.id, title="C", description="d", category="x"))
        self.seed(
            SkillEndorsement(skill_id=skill.id, endorser_id=peer.id, rating=3),
            Enrollment(user_id=user.id, course_id=course.id, progress_percentage=100, completed=True),
        )

        resp = self.client.get(f"{API}/users/{user.id}/profile")

        self.assertEqual(resp.status_code, 200)
        data = resp.json()["data"]
        self.assertEqual(data["user"]["bio"], "Hi")
        self.assertEqual(data["skills"][0]["avgRating"], 3)
        self.assertEqual(data["courseStats"]["completedCourses"], 1)

    def test_unknown_profile_is_404(self):
        self.assertEqual(self.client.get(f"{API}/users/404/profile").status_code, 404)

    def test_recommendations_follow_skill_categories(self):
        user, instructor, employer, mentor = self.seed(
            make_user(), make_user(role="instructor"), make_user(role="employer"), make_user(role="mentor")
        )
        self.seed(
            Skill(user_id=user.id, title="Pandas", category="data"),
            Skill(user_id=mentor.id, title="Mentoring", category="data"),
        )
        self.seed(
            Course(instructor_id=instructor.id, title="Data 101", description="d", category="data"),
            Course(instructor_id=instructor.id, title="Pottery", description="d", category="art"),
            Opportunity(employer_id=employer.id, title="Analyst", description="d", type="job",
                        required_skills=["data"]),
            Opportunity(employer_id=employer.id, title="Chef", description="d", type="job",
                        required_skills=["cooking"]),
        )

        resp = self.client.get(f"{API}/users/me/recommendations", headers=self.auth(user))

        self.assertEqual(resp.status_code, 200)
        data = resp.json()["data"]
        self.assertEqual([c["title"] for c in data["courses"]], ["Data 101"])
        self.assertEqual([o["title"] for o in data["opportunities"]], ["Analyst"])
        self.assertIn(mentor.id, [m["id"] for m in data["mentors"]])


class MentorshipApiTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.mentor, self.mentee, self.outsider = self.seed(
            make_user(role="mentor"), make_user(), make_user()
        )

    def test_mentor_listing_reports_capacity_and_categories(self):
        self.seed(Skill(user_id=self.mentor.id, title="Rust", category="programming"))
        data = self.client.get(f"{API}/mentorships/mentors").json()["data"]
        self.assertEqual([m["id"] for m in data], [self.mentor.id])
        self.assertEqual(data[0]["menteeCount"], 0)
        self.assertEqual(data[0]["skillCategories"], ["programming"])

        filtered = self.client.get(f"{API}/mentorships/mentors", params={"skill_category": "design"})
        self.assertEqual(filtered.json()["data"], [])

    def test_full_mentors_are_hidden(self):
        mentees = self.seed(*[make_user() for _ in range(5)])
        self.seed(*[Mentorship(mentor_id=self.mentor.id, mentee_id=m.id, status="active") for m in mentees])
        data = self.client.get(f"{API}/mentorships/mentors").json()["data"]
        self.assertEqual(data, [])

    def test_request_and_update_lifecycle(self):
        created = self.client.post(
            f"{API}/mentorships", json={"mentorId": self.mentor.id, "goals": "Learn"}, headers=self.auth(self.mentee)
        )
        self.assertEqual(created.status_code, 201)
        mentorship_id = created.json()["data"]["id"]
        self.assertEqual(created.json()["data"]["status"], "pending")

        duplicate = self.client.post(
            f"{API}/mentorships", json={"mentorId": self.mentor.id}, headers=self.auth(self.mentee)
        )
        self.assertEqual(duplicate.status_code, 409)

        url = f"{API}/mentorships/{mentorship_id}/status"
        self.assertEqual(
            self.client.put(url, json={"status": "active"}, headers=self.auth(self.mentee)).status_code, 403
        )
        self.assertEqual(
            self.client.put(url, json={"status": "paused"}, headers=self.auth(self.mentor)).status_code, 400
        )
        active = self.client.put(url, json={"status": "active"}, headers=self.auth(self.mentor))
        self.assertEqual(active.status_code, 200)
        self.assertIsNotNone(active.json()["data"]["startedAt"])

        self.assertEqual(
            self.client.get(f"{API}/mentorships/{mentorship_id}", headers=self.auth(self.mentee)).status_code, 200
        )
        self.assertEqual(
            self.client.get(f"{API}/mentorships/{mentorship_id}", headers=self.auth(self.outsider)).status_code, 403
        )

    def test_cannot_request_a_student_or_yourself(self):
        not_mentor = self.client.post(
            f"{API}/mentorships", json={"mentorId": self.outsider.id}, headers=self.auth(self.mentee)
        )
        self.assertEqual(not_mentor.status_code, 404)
        yourself = self.client.post(
            f"{API}/mentorships", json={"mentorId": self.mentor.id}, headers=self.auth(self.mentor)
        )
        self.assertEqual(yourself.status_code, 400)


class MessagingApiTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.alice, self.bob, self.carol = self.seed(make_user(), make_user(), make_user())

    def send(self, sender, recipient, text):
        return self.client.post(
            f"{API}/messages", json={"recipientId": recipient.id, "message": text}, headers=self.auth(sender)
        )

    def test_send_and_read_conversation(self):
        self.assertEqual(self.send(self.alice, self.bob, "hi").status_code, 201)
        self.send(self.bob, self.alice, "hello")
        self.send(self.alice, self.bob, "how are you?")

        summaries = self.client.get(f"{API}/messages/conversations", headers=self.auth(self.bob)).json()["data"]
        self.assertEqual(len(summaries), 1)
        self.assertEqual(summaries[0]["otherUserId"], self.alice.id)
        self.assertEqual(summaries[0]["unreadCount"], 2)
        self.assertEqual(summaries[0]["lastMessage"], "how are you?")

        thread = self.client.get(
            f"{API}/messages/conversation/{self.alice.id}/{self.bob.id}", headers=self.auth(self.bob)
        ).json()["data"]
        self.assertEqual([m["message"] for m in thread], ["hi", "hello", "how are you?"])

        unread = self.fetch_all(
            select(Message).where(Message.recipient_id == self.bob.id, Message.is_read.is_(False))
        )
        self.assertEqual(unread, [])

    def test_outsiders_cannot_read_conversations(self):
        resp = self.client.get(
            f"{API}/messages/conversation/{self.alice.id}/{self.bob.id}", headers=self.auth(self.carol)
        )
        self.assertEqual(resp.status_code, 403)

    def test_message_validation(self):
        self.assertEqual(self.send(self.alice, self.alice, "me").status_code, 400)
        missing = self.client.post(
            f"{API}/messages", json={"recipientId": 999, "message": "?"}, headers=self.auth(self.alice)
        )
        self.assertEqual(missing.status_code, 404)

    def test_notifications_are_paginated_and_owned(self):
        for i in range(3):
            self.send(self.alice, self.bob, f"m{i}")

        page = self.client.get(
            f"{API}/notifications", params={"limit": "2"}, headers=self.auth(self.bob)
        ).json()
        self.assertEqual(page["pagination"], {"page": 1, "limit": 2, "total": 3, "pages": 2})
        note_id = page["items"][0]["id"]

        foreign = self.client.put(f"{API}/notifications/{note_id}/read", headers=self.auth(self.alice))
        self.assertEqual(foreign.status_code, 404)

        read = self.client.put(f"{API}/notifications/{note_id}/read", headers=self.auth(self.bob))
        self.assertEqual(read.status_code, 200)
        self.assertTrue(read.json()["data"]["isRead"])


class SearchApiTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        owner, instructor = self.seed(
            make_user(first_name="Grace", last_name="Hopper"), make_user(role="instructor")
        )
        self.seed(
            Skill(user_id=owner.id, title="Compiler design", category="programming"),
            Course(instructor_id=instructor.id, title="Compilers", description="Parsing", category="cs"),
        )

    def test_search_requires_query(self):
        resp = self.client.get(f"{API}/search")
        self.assertEqual(resp.status_code, 400)

    def test_unknown_type_is_rejected(self):
        resp = self.client.get(f"{API}/search", params={"query": "x", "type": "planets"})
        self.assertEqual(resp.status_code, 400)

    def test_search_all_types(self):
        data = self.client.get(f"{API}/search", params={"query": "compil"}).json()["data"]
        self.assertEqual([s["title"] for s in data["skills"]], ["Compiler design"])
        self.assertEqual([c["title"] for c in data["courses"]], ["Compilers"])
        self.assertEqual(data["users"], [])
        self.assertEqual(data["opportunities"], [])

    def test_search_single_type_omits_others(self):
        data = self.client.get(f"{API}/search", params={"query": "grace", "type": "users"}).json()["data"]
        self.assertEqual(set(data), {"users"})
        self.assertEqual(data["users"][0]["firstName"], "Grace")

    def test_suggestions(self):
        self.assertEqual(self.client.get(f"{API}/search/suggestions", params={"query": "p"}).json()["data"], [])
        data = self.client.get(f"{API}/search/suggestions", params={"query": "PROG"}).json()["data"]
        self.assertEqual(data, [{"suggestion": "programming", "type": "skill"}])


class AdminApiTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.admin, self.owner, self.peer = self.seed(make_user(role="admin"), make_user(), make_user())
        self.skill = self.seed(Skill(user_id=self.owner.id, title="Spam", category="misc"))
        self.seed(SkillEndorsement(skill_id=self.skill.id, endorser_id=self.peer.id, rating=1))

    def test_admin_endpoints_require_admin_role(self):
        resp = self.client.get(f"{API}/admin/analytics", headers=self.auth(self.owner))
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(self.client.get(f"{API}/admin/analytics").status_code, 401)

    def test_platform_analytics(self):
        data = self.client.get(f"{API}/admin/analytics", headers=self.auth(self.admin)).json()["data"]
        self.assertEqual(data["platformStats"]["totalUsers"], 3)
        self.assertEqual(data["platformStats"]["students"], 2)
        self.assertEqual(data["platformStats"]["totalSkills"], 1)
        self.assertEqual(data["popularSkills"][0]["category"], "misc")
        self.assertEqual(sum(p["newUsers"] for p in data["userGrowth"]), 3)

    def test_verification(self):
        url = f"{API}/admin/users/{self.owner.id}/verification"
        resp = self.client.put(url, json={"isVerified": True}, headers=self.auth(self.admin))
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(self.fetch_all(select(User).where(User.id == self.owner.id))[0].is_verified)

        missing = self.client.put(
            f"{API}/admin/users/999/verification", json={"isVerified": True}, headers=self.auth(self.admin)
        )
        self.assertEqual(missing.status_code, 404)

    def test_reject_removes_skill_and_notifies_owner(self):
        resp = self.client.post(
            f"{API}/admin/skills/{self.skill.id}/moderate",
            json={"action": "reject", "reason": "spam"},
            headers=self.auth(self.admin),
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["data"]["message"], "Skill rejected successfully")
        self.assertEqual(self.fetch_all(select(Skill)), [])
        self.assertEqual(self.fetch_all(select(SkillEndorsement)), [])
        note = self.fetch_all(select(Notification).where(Notification.user_id == self.owner.id))[0]
        self.assertIn('"Spam"', note.message)
        self.assertIn("spam", note.message)

    def test_flag_keeps_skill(self):
        resp = self.client.post(
            f"{API}/admin/skills/{self.skill.id}/moderate", json={"action": "flag"}, headers=self.auth(self.admin)
        )
        self.assertEqual(resp.json()["data"]["message"], "Skill flagged successfully")
        self.assertEqual(len(self.fetch_all(select(Skill))), 1)

    def test_unknown_moderation_action(self):
        resp = self.client.post(
            f"{API}/admin/skills/{self.skill.id}/moderate", json={"action": "burn"}, headers=self.auth(self.admin)
        )
        self.assertEqual(resp.status_code, 400)


class AnalyticsApiTests(ApiTestCase):
    def test_public_analytics(self):
        owner, instructor, employer, student = self.seed(
            make_user(), make_user(role="instructor"), make_user(role="employer"), make_user()
        )
        course = self.seed(Course(instructor_id=instructor.id, title="T", description="d", category="data",
                                  difficulty_level="beginner"))
        opportunity = self.seed(Opportunity(employer_id=employer.id, title="O", description="d", type="job"))
        self.seed(
            Skill(user_id=owner.id, title="A", category="data"),
            Skill(user_id=owner.id, title="B", category="data"),
            Enrollment(user_id=student.id, course_id=course.id, progress_percentage=100, completed=True),
            Enrollment(user_id=owner.id, course_id=course.id, progress_percentage=50),
            Application(opportunity_id=opportunity.id, applicant_id=student.id, status="accepted"),
            Application(opportunity_id=opportunity.id, applicant_id=owner.id),
        )

        skills = self.client.get(f"{API}/analytics/skills", params={"timeframe": "3 months"}).json()["data"]
        self.assertEqual([(p["category"], p["skillCount"]) for p in skills], [("data", 2)])

        opportunities = self.client.get(f"{API}/analytics/opportunities").json()["data"]
        self.assertEqual(opportunities[0]["totalOpportunities"], 1)
        self.assertEqual(opportunities[0]["totalApplications"], 2)
        self.assertEqual(opportunities[0]["applicationsPerOpportunity"], 2.0)
        self.assertEqual(opportunities[0]["acceptedApplications"], 1)

        courses = self.client.get(f"{API}/analytics/courses").json()["data"]
        self.assertEqual(courses[0]["totalEnrollments"], 2)
        self.assertEqual(courses[0]["completions"], 1)
        self.assertEqual(courses[0]["completionRate"], 50.0)


class HealthTests(ApiTestCase):
    def test_health(self):
        resp = self.client.get("/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["env"], "test")
