"""Tests for review transitions and document verification field production."""
import unittest
from datetime import datetime, timezone
from types import SimpleNamespace

from schemas.enums import ApplicationStatus
from services.documents import find_document, set_document_verification
from services.errors import NotFoundError, ValidationError
from services.lifecycle import transition_status

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _application(status="pending", comments=None, reviewed_by=None, documents=()):
    return SimpleNamespace(
        id="app-000000000001",
        status=status,
        admin_comments=comments,
        reviewed_by=reviewed_by,
        documents=list(documents),
    )


def _document(doc_id, verified=False):
    return SimpleNamespace(id=doc_id, is_verified=verified, verified_by=None, verified_at=None)


class TestTransitionStatus(unittest.TestCase):
    def test_pending_to_in_review(self):
        fields = transition_status(_application(), "in-review", "usr-aaaaaaaaaaaa", "Checking income", now=NOW)
        self.assertEqual(
            fields,
            {
                "status": "in-review",
                "reviewed_by": "usr-aaaaaaaaaaaa",
                "updated_at": NOW,
                "admin_comments": "Checking income",
            },
        )

    def test_accepts_enum_members(self):
        fields = transition_status(_application(), ApplicationStatus.COMPLETED, "usr-aaaaaaaaaaaa", now=NOW)
        self.assertEqual(fields["status"], "completed")

    def test_any_status_reachable_from_any_status(self):
        for current in ApplicationStatus:
            for target in ApplicationStatus:
                fields = transition_status(_application(status=current.value), target.value, "usr-aaaaaaaaaaaa")
                self.assertEqual(fields["status"], target.value)

    def test_terminal_state_can_be_reopened(self):
        fields = transition_status(_application(status="rejected"), "pending", "usr-bbbbbbbbbbbb", now=NOW)
        self.assertEqual(fields["status"], "pending")

    def test_missing_comments_keep_existing(self):
        app = _application(status="in-review", comments="Earlier note", reviewed_by="usr-aaaaaaaaaaaa")
        fields = transition_status(app, "completed", "usr-bbbbbbbbbbbb", now=NOW)
        self.assertNotIn("admin_comments", fields)
        self.assertEqual(fields["reviewed_by"], "usr-bbbbbbbbbbbb")

    def test_new_comments_overwrite(self):
        app = _application(status="in-review", comments="Earlier note")
        fields = transition_status(app, "rejected", "usr-bbbbbbbbbbbb", "Income not verified", now=NOW)
        self.assertEqual(fields["admin_comments"], "Income not verified")

    def test_does_not_mutate_application(self):
        app = _application()
        transition_status(app, "completed", "usr-aaaaaaaaaaaa", "ok", now=NOW)
        self.assertEqual(app.status, "pending")
        self.assertIsNone(app.reviewed_by)
        self.assertIsNone(app.admin_comments)

    def test_unknown_status_rejected(self):
        with self.assertRaises(ValidationError):
            transition_status(_application(), "approved", "usr-aaaaaaaaaaaa")

    def test_stamps_current_time_by_default(self):
        before = datetime.now(timezone.utc)
        fields = transition_status(_application(), "in-review", "usr-aaaaaaaaaaaa")
        self.assertGreaterEqual(fields["updated_at"], before)


class TestDocumentVerification(unittest.TestCase):
    def test_verify_document(self):
        app = _application(documents=[_document("doc-000000000001"), _document("doc-000000000002")])
        fields = set_document_verification(app, "doc-000000000002", True, "usr-aaaaaaaaaaaa", now=NOW)
        self.assertEqual(
            fields, {"is_verified": True, "verified_by": "usr-aaaaaaaaaaaa", "verified_at": NOW}
        )

    def test_reverification_overwrites(self):
        doc = _document("doc-000000000001", verified=True)
        app = _application(documents=[doc])
        fields = set_document_verification(app, doc.id, False, "usr-bbbbbbbbbbbb", now=NOW)
        self.assertFalse(fields["is_verified"])
        self.assertEqual(fields["verified_by"], "usr-bbbbbbbbbbbb")

    def test_missing_document(self):
        doc = _document("doc-000000000001")
        app = _application(documents=[doc])
        with self.assertRaises(NotFoundError) as ctx:
            set_document_verification(app, "doc-ffffffffffff", True, "usr-aaaaaaaaaaaa")
        self.assertEqual(ctx.exception.entity, "document")
        self.assertFalse(doc.is_verified)
        self.assertIsNone(doc.verified_by)

    def test_find_document_scoped_to_application(self):
        other = _application(documents=[_document("doc-000000000009")])
        app = _application(documents=[_document("doc-000000000001")])
        self.assertIs(find_document(other, "doc-000000000009"), other.documents[0])
        with self.assertRaises(NotFoundError):
            find_document(app, "doc-000000000009")


if __name__ == "__main__":
    unittest.main()
