#!/usr/bin/env python3
"""
Seed the database with an admin account, role templates, documents and FAQs.

Templates are re-seeded from scratch: existing sections and items of each
seeded role template are replaced. User checklists are not touched; run a
template sync from the admin area to push changes into them.

Usage:
    python scripts/seed.py
"""
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlmodel import Session, select

from app.core.database import create_db_and_tables, engine
from app.core.security import hash_password
from app.models import (
    FAQ,
    PublicDoc,
    Role,
    RoleTemplate,
    TemplateItem,
    TemplateSection,
    User,
    UserStatus,
)

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "ChangeMe123!"

COMPANY_BASICS = {
    "title": "Company Basics",
    "items": [
        {
            "title": "Review Employee Handbook",
            "description": "Read through the complete employee handbook to understand company policies.",
            "link_url": "#employee-handbook",
            "due_in_days": 3,
        },
        {
            "title": "Complete Company Overview Training",
            "description": "Watch the company overview video and complete the quiz.",
            "link_url": "#company-overview",
            "due_in_days": 2,
        },
    ],
}

HIPAA_TRAINING = {
    "title": "Complete HIPAA Training",
    "description": "Complete the mandatory HIPAA privacy and security training module.",
    "link_url": "#hipaa-training",
    "due_in_days": 7,
}

TEMPLATES = [
    {
        "role": Role.CS,
        "title": "Customer Service Onboarding",
        "sections": [
            COMPANY_BASICS,
            {
                "title": "Security & Compliance",
                "items": [
                    HIPAA_TRAINING,
                    {
                        "title": "Sign Confidentiality Agreement",
                        "description": "Review and sign the confidentiality and non-disclosure agreement.",
                        "due_in_days": 3,
                    },
                ],
            },
            {
                "title": "Systems Access",
                "items": [
                    {
                        "title": "Set Up Email Account",
                        "description": "Configure your company email on all devices.",
                        "due_in_days": 1,
                    },
                    {
                        "title": "Access CRM System",
                        "description": "Complete CRM system training and set up your account.",
                        "link_url": "#crm-training",
                        "due_in_days": 5,
                    },
                ],
            },
            {
                "title": "Role Training",
                "items": [
                    {
                        "title": "Shadow Experienced Agent",
                        "description": "Spend time shadowing an experienced customer service agent.",
                        "due_in_days": 14,
                    },
                    {
                        "title": "Complete Mock Calls",
                        "description": "Practice handling various customer scenarios with your trainer.",
                        "due_in_days": 21,
                    },
                ],
            },
        ],
    },
    {
        "role": Role.PROVIDER,
        "title": "Provider Onboarding",
        "sections": [
            COMPANY_BASICS,
            {
                "title": "Credentialing & Compliance",
                "items": [
                    {
                        "title": "Submit Credentialing Documents",
                        "description": "Provide all required licenses, certifications, and credentials.",
                        "due_in_days": 5,
                    },
                    HIPAA_TRAINING,
                    {
                        "title": "DEA Registration Verification",
                        "description": "Verify DEA registration and submit documentation.",
                        "due_in_days": 7,
                    },
                ],
            },
            {
                "title": "Clinical Systems",
                "items": [
                    {
                        "title": "EHR System Training",
                        "description": "Complete comprehensive training on the Electronic Health Record system.",
                        "link_url": "#ehr-training",
                        "due_in_days": 10,
                    },
                    {
                        "title": "E-Prescribing Setup",
                        "description": "Set up and verify e-prescribing access and EPCS certification.",
                        "due_in_days": 7,
                    },
                ],
            },
        ],
    },
    {
        "role": Role.RN,
        "title": "Registered Nurse Onboarding",
        "sections": [
            COMPANY_BASICS,
            {
                "title": "Credentialing & Compliance",
                "items": [
                    {
                        "title": "Submit License Verification",
                        "description": "Provide current RN license and any specialty certifications.",
                        "due_in_days": 3,
                    },
                    HIPAA_TRAINING,
                    {
                        "title": "BLS Certification Verification",
                        "description": "Submit proof of current BLS certification.",
                        "due_in_days": 3,
                    },
                ],
            },
            {
                "title": "Clinical Orientation",
                "items": [
                    {
                        "title": "Review Nursing Protocols",
                        "description": "Review all nursing protocols and care standards.",
                        "link_url": "#nursing-protocols",
                        "due_in_days": 10,
                    },
                    {
                        "title": "Shadow Experienced Nurse",
                        "description": "Shadow an experienced RN for at least 2 shifts.",
                        "due_in_days": 10,
                    },
                ],
            },
        ],
    },
    {
        "role": Role.MA_BACKOFFICE,
        "title": "Back-office MA Onboarding",
        "sections": [
            COMPANY_BASICS,
            {
                "title": "Compliance & Safety",
                "items": [
                    HIPAA_TRAINING,
                    {
                        "title": "OSHA Safety Training",
                        "description": "Complete workplace safety and bloodborne pathogen training.",
                        "link_url": "#osha-training",
                        "due_in_days": 7,
                    },
                ],
            },
            {
                "title": "Clinical Skills",
                "items": [
                    {
                        "title": "Vital Signs Competency",
                        "description": "Complete vital signs assessment competency check-off.",
                        "due_in_days": 5,
                    },
                    {
                        "title": "Phlebotomy Competency",
                        "description": "Complete blood draw competency assessment.",
                        "due_in_days": 7,
                    },
                ],
            },
        ],
    },
]

DOCS = [
    {
        "title": "Employee Handbook",
        "description": "Comprehensive guide covering company policies, procedures, and expectations.",
        "url": "https://example.com/handbook",
        "category": "Policies",
    },
    {
        "title": "Code of Conduct",
        "description": "Our ethical guidelines and professional standards.",
        "url": "https://example.com/code-of-conduct",
        "category": "Policies",
    },
    {
        "title": "HIPAA Compliance Guide",
        "description": "Essential information about patient privacy regulations.",
        "url": "https://example.com/hipaa-guide",
        "category": "Compliance",
    },
    {
        "title": "Benefits Overview",
        "description": "Summary of employee benefits including health insurance and PTO.",
        "url": "https://example.com/benefits",
        "category": "HR",
    },
]

FAQS = [
    {
        "question": "How long does the onboarding process take?",
        "answer": "The onboarding process typically takes 2-4 weeks depending on your role.",
    },
    {
        "question": "What should I bring on my first day?",
        "answer": "Two forms of identification and any relevant certifications or licenses.",
    },
    {
        "question": "What if I need more time to complete a task?",
        "answer": "Contact your supervisor or HR. Due dates are guidance, not deadlines.",
    },
]


def seed_admin(session: Session) -> None:
    admin = session.exec(select(User).where(User.email == ADMIN_EMAIL)).first()
    if admin is not None:
        print(f"  Admin user exists: {admin.email}")
        return
    session.add(
        User(
            email=ADMIN_EMAIL,
            name="Admin User",
            password_hash=hash_password(ADMIN_PASSWORD),
            role=Role.ADMIN,
            status=UserStatus.APPROVED,
        )
    )
    print(f"  Admin user created: {ADMIN_EMAIL}")


def seed_templates(session: Session) -> None:
    for data in TEMPLATES:
        template = session.exec(
            select(RoleTemplate).where(RoleTemplate.role == data["role"])
        ).first()
        if template is None:
            template = RoleTemplate(role=data["role"], title=data["title"])
        template.title = data["title"]
        template.sections = [
            TemplateSection(
                title=section["title"],
                order=s_index,
                items=[
                    TemplateItem(order=i_index, **item)
                    for i_index, item in enumerate(section["items"])
                ],
            )
            for s_index, section in enumerate(data["sections"])
        ]
        session.add(template)
        print(f"  Template for {data['role'].value}: {data['title']}")


def seed_content(session: Session) -> None:
    for doc in session.exec(select(PublicDoc)).all():
        session.delete(doc)
    for faq in session.exec(select(FAQ)).all():
        session.delete(faq)

    for order, doc in enumerate(DOCS):
        session.add(PublicDoc(order=order, **doc))
    for order, faq in enumerate(FAQS):
        session.add(FAQ(order=order, **faq))
    print(f"  Created {len(DOCS)} documents and {len(FAQS)} FAQs")


def main():
    create_db_and_tables()
    with Session(engine) as session:
        print("Creating admin user...")
        seed_admin(session)
        print("Creating role templates...")
        seed_templates(session)
        print("Creating public content...")
        seed_content(session)
        session.commit()

    print("\nSeed complete.")
    print(f"Admin login: {ADMIN_EMAIL} / {ADMIN_PASSWORD}")
    print("Change the admin password after first login.")


if __name__ == "__main__":
    main()
