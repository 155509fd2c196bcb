"""Global search across checklist tasks, public content and users."""
import logging
from dataclasses import asdict, dataclass
from typing import Any

from sqlalchemy import or_
from sqlmodel import Session, select

from app.core.auth import Principal
from app.models import FAQ, PublicDoc, User, UserChecklist

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
PER_SOURCE_LIMIT = 10
QUICK_SEARCH_LIMIT = 8
FAQ_SNIPPET_LENGTH = 150
LIKE_ESCAPE = "\\"


@dataclass
class SearchResult:
    type: str  # task | document | faq | user | section
    id: str
    title: str
    url: str
    description: str | None = None
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict:
        return asdict(self)


def _relevance(result: SearchResult, term: str) -> int:
    """0 for an exact title match, 1 for a prefix match, 2 otherwise."""
    title = result.title.lower()
    if title == term:
        return 0
    if title.startswith(term):
        return 1
    return 2


def _like_pattern(term: str) -> str:
    """LIKE pattern matching term literally anywhere in the value."""
    for char in (LIKE_ESCAPE, "%", "_"):
        term = term.replace(char, LIKE_ESCAPE + char)
    return f"%{term}%"


def _search_checklist(session: Session, principal: Principal, term: str) -> list[SearchResult]:
    checklist = session.exec(
        select(UserChecklist).where(UserChecklist.user_id == principal.id)
    ).first()
    if checklist is None:
        return []

    results = []
    for section in checklist.sections:
        if term in section.title.lower():
            results.append(
                SearchResult(
                    type="section",
                    id=str(section.id),
                    title=section.title,
                    description=f"Section with {len(section.items)} tasks",
                    url=f"/app/checklist#section-{section.id}",
                    metadata={"section_id": str(section.id)},
                )
            )

        for item in section.items:
            in_description = item.description and term in item.description.lower()
            if term in item.title.lower() or in_description:
                results.append(
                    SearchResult(
                        type="task",
                        id=str(item.id),
                        title=item.title,
                        description=item.description or None,
                        url=f"/app/checklist#item-{item.id}",
                        metadata={
                            "section_id": str(section.id),
                            "section_title": section.title,
                            "status": item.status.value,
                            "item_id": str(item.id),
                        },
                    )
                )
    return results


def _search_documents(session: Session, pattern: str) -> list[SearchResult]:
    docs = session.exec(
        select(PublicDoc)
        .where(
            or_(
                PublicDoc.title.ilike(pattern, escape=LIKE_ESCAPE),
                PublicDoc.description.ilike(pattern, escape=LIKE_ESCAPE),
                PublicDoc.category.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
        .order_by(PublicDoc.category, PublicDoc.order)
        .limit(PER_SOURCE_LIMIT)
    ).all()
    return [
        SearchResult(
            type="document",
            id=str(doc.id),
            title=doc.title,
            description=doc.description or None,
            url=doc.url,
            metadata={"category": doc.category},
        )
        for doc in docs
    ]


def _search_faqs(session: Session, pattern: str) -> list[SearchResult]:
    faqs = session.exec(
        select(FAQ)
        .where(
            or_(
                FAQ.question.ilike(pattern, escape=LIKE_ESCAPE),
                FAQ.answer.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
        .order_by(FAQ.order)
        .limit(PER_SOURCE_LIMIT)
    ).all()
    results = []
    for faq in faqs:
        snippet = faq.answer[:FAQ_SNIPPET_LENGTH]
        if len(faq.answer) > FAQ_SNIPPET_LENGTH:
            snippet += "..."
        results.append(
            SearchResult(
                type="faq",
                id=str(faq.id),
                title=faq.question,
                description=snippet,
                url=f"/faqs#faq-{faq.id}",
            )
        )
    return results


def _search_users(session: Session, pattern: str) -> list[SearchResult]:
    users = session.exec(
        select(User)
        .where(
            or_(
                User.name.ilike(pattern, escape=LIKE_ESCAPE),
                User.email.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
        .order_by(User.email)
        .limit(PER_SOURCE_LIMIT)
    ).all()
    return [
        SearchResult(
            type="user",
            id=str(user.id),
            title=user.name or user.email,
            description=f"{user.role.value} • {user.email}",
            url=f"/admin/users?userId={user.id}",
            metadata={"role": user.role.value, "email": user.email},
        )
        for user in users
    ]


def global_search(
    session: Session, query: str | None, principal: Principal | None = None
) -> list[SearchResult]:
    """
    Case-insensitive substring search.

    Signed-in users also search their own checklist sections and tasks;
    admins also search users. Exact title matches come first, then titles
    starting with the query, then everything else in source order.
    """
    if not query or len(query.strip()) < MIN_QUERY_LENGTH:
        return []

    term = query.strip().lower()
    pattern = _like_pattern(term)
    results: list[SearchResult] = []

    if principal is not None:
        results.extend(_search_checklist(session, principal, term))
    results.extend(_search_documents(session, pattern))
    results.extend(_search_faqs(session, pattern))
    if principal is not None and principal.is_admin:
        results.extend(_search_users(session, pattern))

    # sort() is stable, so ties keep source order
    results.sort(key=lambda r: _relevance(r, term))
    logger.debug(f"Search {term!r}: {len(results)} results")
    return results


def quick_search(
    session: Session, query: str | None, principal: Principal | None = None
) -> list[SearchResult]:
    """Top results for the command palette."""
    return global_search(session, query, principal)[:QUICK_SEARCH_LIMIT]
