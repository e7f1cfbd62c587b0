import logging
import re
from typing import Any, Dict

import requests

from article_models import Article, PublishError
from constants import HTML_TAG_RE
from settings import WordPressConfig

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30

H2_RE = re.compile(r"<h2>(.*?)</h2>", re.I)
H3_RE = re.compile(r"<h3>(.*?)</h3>", re.I)
P_RE = re.compile(r"<p>(.*?)</p>", re.I)
UL_RE = re.compile(r"<ul>([\s\S]*?)</ul>", re.I)
OL_RE = re.compile(r"<ol>([\s\S]*?)</ol>", re.I)


def _json_body(resp: requests.Response) -> Dict:
    try:
        return resp.json()
    except ValueError as e:
        raise PublishError(f"WordPress returned a non-JSON body: {e}") from e


def _headers() -> Dict[str, str]:
    return {"Content-Type": "application/json", "Accept": "application/json"}


def _heading(content: str, level: int = 2) -> str:
    if level == 3:
        return f'<!-- wp:heading {{"level":3}} --><h3>{content}</h3><!-- /wp:heading -->'
    return f"<!-- wp:heading --><h2>{content}</h2><!-- /wp:heading -->"


def _paragraph(content: str) -> str:
    return f"<!-- wp:paragraph --><p>{content}</p><!-- /wp:paragraph -->"


def _list(items_html: str, ordered: bool = False) -> str:
    if ordered:
        return f'<!-- wp:list {{"ordered":true}} --><ol>{items_html}</ol><!-- /wp:list -->'
    return f"<!-- wp:list --><ul>{items_html}</ul><!-- /wp:list -->"


def _markdown_block(para: str) -> str:
    if para.startswith("# "):
        return _heading(para[2:])
    if para.startswith("## "):
        return _heading(para[3:])
    if para.startswith("### "):
        return _heading(para[4:], level=3)
    return _paragraph(para)


def to_blocks(content: Any) -> str:
    """Wrap headings, paragraphs and lists in Gutenberg block comments.

    HTML input is rewritten in a single regex pass per element type; text
    without any tag is treated as markdown-ish paragraphs separated by blank
    lines. Non-string input is returned stringified, and so is the input when
    formatting fails.
    """
    if not isinstance(content, str):
        logger.warning("Content is not a string, converting to string")
        return "" if content is None else str(content)
    try:
        if HTML_TAG_RE.search(content):
            content_out = H2_RE.sub(lambda m: _heading(m.group(1)), content)
            content_out = H3_RE.sub(lambda m: _heading(m.group(1), level=3), content_out)
            content_out = P_RE.sub(lambda m: _paragraph(m.group(1)), content_out)
            content_out = UL_RE.sub(lambda m: _list(m.group(1)), content_out)
            return OL_RE.sub(lambda m: _list(m.group(1), ordered=True), content_out)

        paragraphs = [para.strip() for para in content.split("\n\n")]
        return "\n\n".join(_markdown_block(para) for para in paragraphs if para)
    except Exception as e:
        logger.error(f"Error formatting content: {e}")
        return content


def check_authentication(config: WordPressConfig) -> Dict:
    """Check the credentials against /users/me and return the user record."""
    url = f"{config.api_url}/users/me"
    logger.info(f"Testing WordPress authentication to {url}")
    try:
        resp = requests.get(
            url,
            headers=_headers(),
            auth=(config.username, config.password),
            timeout=REQUEST_TIMEOUT
        )
    except requests.RequestException as e:
        raise PublishError(f"WordPress request failed: {e}") from e
    if not resp.ok:
        raise PublishError(f"WordPress API error {resp.status_code}: {resp.text}")
    user = _json_body(resp)
    logger.info(f"Logged in as: {user.get('name') or 'User'} (ID: {user.get('id')})")
    return user


def publish_post(config: WordPressConfig, article: Article, status: str = "draft") -> Dict:
    title = str(article.title or "").strip()
    if not title:
        raise ValueError("Article title is required")
    content = str(article.content or "")
    if not content:
        raise ValueError("Article content is required")

    payload = {
        "title": title,
        "content": to_blocks(content),
        "status": status
    }
    url = f"{config.api_url}/posts"
    logger.info(f"Publishing article: {title} ({status}) to {url}, {len(payload['content'])} characters")
    try:
        resp = requests.post(
            url,
            headers=_headers(),
            auth=(config.username, config.password),
            json=payload,
            timeout=REQUEST_TIMEOUT
        )
    except requests.RequestException as e:
        raise PublishError(f"WordPress request failed: {e}") from e
    if not resp.ok:
        raise PublishError(f"WordPress API error {resp.status_code}: {resp.text}")
    post = _json_body(resp)
    logger.info(f"Article published as {status}: post {post.get('id')} at {post.get('link')}")
    return post
