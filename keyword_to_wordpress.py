import argparse
import json
import logging
import re
import time
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from functools import partial
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from article_generator import ArticleGenerator, OpenAIChatClient
from article_models import (
    Article,
    ConfigurationError,
    GenerationFailure,
    KeywordRow,
    PromptSettings,
    PublicationRecord,
    PublishError,
)
from publishing_context import PublicationRecordBuilder
from settings import (
    PUBLISH_STATUSES,
    AppSettings,
    OpenAIConfig,
    WordPressConfig,
    configure_logging,
    load_environment,
    load_prompt_settings,
    validate_config,
)
from wordpress_client import check_authentication, publish_post

logger = logging.getLogger(__name__)

Publisher = Callable[[Article], Dict]


@dataclass
class AutomationRun:
    """State of one automation run; nothing here outlives the run."""

    run_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    articles: Dict[str, Article] = field(default_factory=dict)
    records: Dict[str, PublicationRecord] = field(default_factory=dict)
    failures: Dict[str, str] = field(default_factory=dict)
    succeeded: List[str] = field(default_factory=list)
    messages: List[Dict[str, str]] = field(default_factory=list)
    total: int = 0
    progress: int = 0

    def add_message(self, text: str) -> None:
        self.messages.append({"text": text, "timestamp": datetime.now(timezone.utc).isoformat()})
        logger.info(f"[{self.run_id[:8]}] {text}")

    def mark_done(self, done: int) -> None:
        self.progress = int(done / self.total * 100) if self.total else 100


def run_automation(
    rows: Iterable[KeywordRow],
    generator: ArticleGenerator,
    app_settings: AppSettings,
    prompt_settings: Optional[PromptSettings] = None,
    publisher: Optional[Publisher] = None,
    record_builder: Optional[PublicationRecordBuilder] = None,
    run: Optional[AutomationRun] = None,
    sleep: Callable[[float], None] = time.sleep
) -> AutomationRun:
    """Generate (and publish, unless `publisher` is None) an article per pending row."""
    run = run or AutomationRun()
    record_builder = record_builder or PublicationRecordBuilder()
    pending = [row for row in rows if row.keyword and not row.is_published]
    run.total = len(pending)
    if not pending:
        run.add_message("No pending keywords found. Nothing to do.")
        run.mark_done(0)
        return run

    run.add_message(f"Found {len(pending)} keywords to process")
    for index, row in enumerate(pending):
        keyword = row.keyword
        run.add_message(f'Processing {index + 1}/{len(pending)}: "{keyword}"')
        try:
            article = generator.generate(keyword, app_settings.min_words, prompt_settings)
            run.articles[keyword] = article
            if publisher is not None:
                post = publisher(article)
                run.records[keyword] = record_builder.build(row, article, post)
            run.succeeded.append(keyword)
            run.add_message(f"Successfully processed keyword: {keyword}")
        except (GenerationFailure, PublishError, ValueError) as e:
            run.failures[keyword] = str(e)
            logger.error(f'Failed to process keyword "{keyword}": {e}')
        run.mark_done(index + 1)

        if index < len(pending) - 1 and app_settings.delay_between_posts > 0:
            logger.info(f"Waiting {app_settings.delay_between_posts} seconds before next keyword...")
            sleep(app_settings.delay_between_posts)
    return run


def read_keywords(keywords: Iterable[str], keywords_file: Optional[str] = None) -> List[str]:
    collected = [k.strip() for k in keywords if k and k.strip()]
    if keywords_file:
        for line in Path(keywords_file).read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if line and not line.startswith("#"):
                collected.append(line)
    seen = set()
    unique = []
    for keyword in collected:
        lowered = keyword.lower()
        if lowered not in seen:
            seen.add(lowered)
            unique.append(keyword)
    return unique


def slugify(keyword: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", keyword.lower()).strip("-")
    return slug[:80] or "article"


def render_html(article: Article) -> str:
    return f"<h1>{article.title}</h1>\n{article.content.strip()}\n"


def write_article(out_dir: Path, keyword: str, article: Article) -> Path:
    html_path = out_dir / f"{slugify(keyword)}.html"
    html_path.write_text(render_html(article), encoding="utf-8")
    if article.recipe_data is not None:
        recipe_path = out_dir / f"{slugify(keyword)}.recipe.json"
        recipe_path.write_text(
            json.dumps(article.recipe_data.to_dict(), indent=2, ensure_ascii=False),
            encoding="utf-8"
        )
    return html_path


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Generate SEO articles for keywords and publish them to WordPress.")
    ap.add_argument("keywords", nargs="*", help="Keywords to write articles about")
    ap.add_argument("--keywords-file", help="Text file with one keyword per line")
    ap.add_argument("--prompts", help="JSON file with prompt settings")
    ap.add_argument("--min-words", type=int, help="Minimum article length (default: MIN_WORDS or 800)")
    ap.add_argument("--status", choices=PUBLISH_STATUSES, help="WordPress post status")
    ap.add_argument("--multi-part", action="store_true", help="Generate introduction, body and conclusion separately")
    ap.add_argument("--recipes", action="store_true", help="Detect recipes and extract recipe data")
    ap.add_argument("--dry-run", action="store_true", help="Generate articles without publishing them")
    ap.add_argument("--out-dir", help="Write each article (and recipe data) to this directory")
    ap.add_argument("--owner", help="Owner id recorded for the processed keywords")
    ap.add_argument("--verbose", action="store_true", help="Debug logging")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    load_environment()
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        openai_config = OpenAIConfig.from_env()
        wp_config = WordPressConfig.from_env()
        app_settings = AppSettings.from_env()
        prompt_settings = load_prompt_settings(args.prompts)
        if args.multi_part:
            prompt_settings = replace(prompt_settings, use_multi_part_generation=True)
        if args.recipes:
            prompt_settings = replace(prompt_settings, enable_recipe_detection=True)
        if args.min_words:
            app_settings = replace(app_settings, min_words=args.min_words)
        if args.status:
            app_settings = replace(app_settings, publish_status=args.status)
        validate_config(openai_config, wp_config, prompt_settings, require_wordpress=not args.dry_run)
        keywords = read_keywords(args.keywords, args.keywords_file)
    except (ConfigurationError, OSError) as e:
        raise SystemExit(f"Configuration error: {e}")

    if not keywords:
        raise SystemExit("No keywords given. Pass them as arguments or with --keywords-file.")

    publisher: Optional[Publisher] = None
    if not args.dry_run:
        try:
            check_authentication(wp_config)
        except PublishError as e:
            raise SystemExit(f"WordPress connection failed: {e}")
        publisher = partial(publish_post, wp_config, status=app_settings.publish_status)

    generator = ArticleGenerator(OpenAIChatClient(openai_config), openai_config)
    rows = [KeywordRow(keyword=k, owner_id=args.owner, created_by=args.owner) for k in keywords]
    run = run_automation(rows, generator, app_settings, prompt_settings, publisher=publisher)

    if args.out_dir:
        out_dir = Path(args.out_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        for keyword, article in run.articles.items():
            print("Article:", write_article(out_dir, keyword, article))

    for record in run.records.values():
        print(f"Published: {record.keyword} -> {record.post_url} (post {record.post_id})")
    print(f"Total keywords: {run.total}")
    print(f"Successful: {len(run.succeeded)}")
    print(f"Failed: {len(run.failures)}")
    return 1 if run.failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
