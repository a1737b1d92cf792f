"""Serialize ORM records to camelCase response dicts."""
from __future__ import annotations

from typing import Any

from models import ApplicationDocument, CreditApplication, CustomerProfile, User
from utils.case import dict_keys_to_camel, iso


def document_to_response(d: ApplicationDocument) -> dict[str, Any]:
    return {
        "id": d.id,
        "fileName": d.file_name,
        "filePath": d.file_path,
        "isVerified": d.is_verified,
        "verifiedBy": d.verified_by,
        "verifiedAt": iso(d.verified_at),
        "uploadDate": iso(d.upload_date),
    }


def application_to_response(app: CreditApplication) -> dict[str, Any]:
    return {
        "id": app.id,
        "customerId": app.customer_id,
        # Snapshot is returned exactly as submitted.
        "applicationData": app.application_data or {},
        "calculatedScore": app.calculated_score,
        "riskAssessment": app.risk_assessment,
        "recommendations": dict_keys_to_camel(app.recommendations) if app.recommendations else None,
        "status": app.status,
        "reviewedBy": app.reviewed_by,
        "adminComments": app.admin_comments,
        "documents": [document_to_response(d) for d in app.documents],
        "createdAt": iso(app.created_at),
        "updatedAt": iso(app.updated_at),
        "version": app.version,
    }


def profile_to_response(p: CustomerProfile | None) -> dict[str, Any] | None:
    if p is None:
        return None
    return {
        "dateOfBirth": p.date_of_birth.isoformat() if p.date_of_birth else None,
        "address": p.address,
        "employmentStatus": p.employment_status,
        "annualIncome": p.annual_income,
        "employerName": p.employer_name,
        "workExperience": p.work_experience,
        "creditScore": p.credit_score,
        "riskLevel": p.risk_level,
    }


def user_to_response(u: User) -> dict[str, Any]:
    return {
        "id": u.id,
        "email": u.email,
        "role": u.role,
        "firstName": u.first_name,
        "lastName": u.last_name,
        "phone": u.phone,
        "isEmailVerified": u.is_email_verified,
        "isActive": u.is_active,
        "profile": profile_to_response(u.profile),
        "createdAt": iso(u.created_at),
    }


def admin_application_to_response(app: CreditApplication) -> dict[str, Any]:
    """Application plus a summary of the customer who submitted it."""
    out = application_to_response(app)
    c = app.customer
    out["customer"] = (
        {"id": c.id, "firstName": c.first_name, "lastName": c.last_name, "email": c.email}
        if c is not None
        else None
    )
    return out
