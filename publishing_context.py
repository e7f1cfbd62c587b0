from datetime import date
from typing import Any, Callable, Dict, Optional

from article_models import Article, KeywordRow, PublicationRecord


def format_publication_date(day: date) -> str:
    return day.isoformat()


def extract_post_fields(post: Any) -> Dict[str, Any]:
    """Pick the id and public link out of a WordPress post response."""
    if not isinstance(post, dict):
        return {"post_id": None, "post_url": None}
    link = post.get("link")
    if not link and isinstance(post.get("guid"), dict):
        link = post["guid"].get("rendered")
    return {"post_id": post.get("id"), "post_url": link}


class PublicationRecordBuilder:
    """Encapsulates the write-back record created after publishing."""

    def __init__(self, today: Optional[Callable[[], date]] = None):
        self.today = today or date.today

    def build(self, row: KeywordRow, article: Article, post: Any) -> PublicationRecord:
        fields = extract_post_fields(post)
        return PublicationRecord(
            keyword=row.keyword,
            post_id=fields["post_id"],
            post_url=fields["post_url"],
            publication_date=format_publication_date(self.today()),
            word_count=article.word_count,
            owner_id=row.owner_id,
            created_by=row.created_by,
            has_recipe=article.recipe_data is not None
        )
