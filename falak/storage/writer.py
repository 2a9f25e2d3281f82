import re
from datetime import date
from pathlib import Path
from typing import List, Optional, Union

from falak.news.model import EnrichedArticle
from falak.logging_config import create_logger
from falak.utils.time import epoch_millis, format_malay_date


SLUG_MAX_LENGTH = 50
ARTICLE_EXTENSION = ".md"

_NON_ALNUM_RUN = re.compile(r'[^a-z0-9]+')


def slugify(title: str, max_length: int = SLUG_MAX_LENGTH) -> str:
    """Lowercase hyphen-separated slug of a title, with no leading or trailing hyphen."""
    slug = _NON_ALNUM_RUN.sub('-', (title or '').lower()).strip('-')
    return slug[:max_length].strip('-')


def escape_quotes(value: str) -> str:
    return (value or "").replace('"', '\\"')


def render_article_markdown(article: EnrichedArticle) -> str:
    """Frontmatter block followed by the English and Malay summaries."""
    return f"""---
title_en: "{escape_quotes(article.title_en)}"
title_ms: "{escape_quotes(article.title_ms)}"
date: "{article.publish_date}"
source: "{escape_quotes(article.source_name)}"
category: "{article.category.value}"
image: "{escape_quotes(article.image_url)}"
link: "{escape_quotes(article.link)}"
---

{article.summary_en}

---

{article.summary_ms}
"""


class ArticleWriter:
    """Writes enriched articles as `<date>-<slug>.md`, never overwriting an existing file."""

    def __init__(self, output_dir: Union[str, Path]):
        self.output_dir = Path(output_dir)
        self.logger = create_logger("ArticleWriter")

    def filename_for(self, article: EnrichedArticle) -> str:
        slug = slugify(article.title_en) or "article"
        return f"{article.publish_date}-{slug}{ARTICLE_EXTENSION}"

    def save(self, article: EnrichedArticle) -> Optional[str]:
        """
        Write the article file.

        Returns:
            The saved English title, or None when a file with the same name
            already exists (the article counts as already published).
        """
        filename = self.filename_for(article)
        filepath = self.output_dir / filename

        # Check-then-write is not atomic; runs are not expected to overlap.
        if filepath.exists():
            self.logger.info(f"⏭️ Exists: {filename}")
            return None

        self.output_dir.mkdir(parents=True, exist_ok=True)
        filepath.write_text(render_article_markdown(article), encoding="utf-8")
        self.logger.info(f"✅ Saved: {filename}")
        return article.title_en


class AgentArticleWriter:
    """Writes the agent's Malay article pages under timestamp-based names."""

    def __init__(self, output_dir: Union[str, Path], site_name: str = "NASA"):
        self.output_dir = Path(output_dir)
        self.site_name = site_name
        self.logger = create_logger("AgentArticleWriter")

    def render(self, title_ms: str, summary_ms: str, keywords: List[str], original_title: str, link: str, published: date) -> str:
        return f"""# {title_ms}

**📅 Tarikh Diterbitkan:** {format_malay_date(published)}  
**🔗 Sumber Asal:** [{original_title}]({link})  
**📂 Kategori:** Astronomi & Sains Angkasa

---

## 📖 Ringkasan

{summary_ms}

---

**🏷️ Kata Kunci:** {' • '.join(keywords)}

---

<small>

*Artikel ini diterjemahkan secara automatik menggunakan teknologi AI daripada sumber berita [{self.site_name}]({link}). Untuk maklumat terperinci, sila rujuk artikel asal.*

**Penafian:** Terjemahan automatik mungkin tidak sempurna. Untuk ketepatan penuh, rujuk sumber asal dalam Bahasa Inggeris.

</small>
"""

    def save(self, index: int, content: str) -> Path:
        if not self.output_dir.exists():
            self.output_dir.mkdir(parents=True, exist_ok=True)
            self.logger.info(f"📁 Created {self.output_dir}/ directory")

        filepath = self.output_dir / f"article-{epoch_millis()}-{index}{ARTICLE_EXTENSION}"
        filepath.write_text(content, encoding="utf-8")
        self.logger.info(f"💾 Saved: {filepath}")
        return filepath
