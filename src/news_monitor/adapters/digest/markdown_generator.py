"""Markdown digest generator."""

from news_monitor.core import DigestGenerator, ScoredArticle


class MarkdownDigestGenerator(DigestGenerator):
    """Generate markdown digest from ranked articles."""

    def generate(self, articles: list[ScoredArticle], title: str) -> str:
        """Generate markdown digest, one section per category in first-seen order."""
        if not articles:
            return f"# {title}\n\nNo articles found."

        # Group by category, keeping ranked order inside each group
        by_category: dict[str, list[ScoredArticle]] = {}
        for article in articles:
            by_category.setdefault(article.category, []).append(article)

        lines = [
            f"# 📰 {title}",
            "",
            f"Articles: {len(articles)}",
            "",
        ]

        for category, group in by_category.items():
            lines.extend([
                f"## {category} ({len(group)})",
                "",
            ])
            for article in group:
                lines.extend(self._format_entry(article))

        return "\n".join(lines)

    def _format_entry(self, article: ScoredArticle) -> list[str]:
        """Format single article."""
        lines = [
            f"### [{article.title}]({article.link})",
            "",
        ]

        if article.relevance_score is not None or article.importance_score is not None:
            lines.append(
                f"**Relevance:** {article.relevance_score or 0.0:.0%} | "
                f"**Importance:** {article.importance_score or 0.0:.0%}"
            )
            lines.append("")

        if article.summary:
            lines.append(article.summary)
            lines.append("")

        meta_parts = [part for part in (article.source, article.pub_date) if part]
        if meta_parts:
            lines.append(f"*{' | '.join(meta_parts)}*")
            lines.append("")

        lines.append("---")
        lines.append("")

        return lines
