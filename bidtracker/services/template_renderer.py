"""Placeholder substitution for tenant message templates."""

import re
from dataclasses import dataclass

TOKEN_PATTERN = re.compile(r"\{\{\s*([A-Za-z_]+)\s*\}\}")


@dataclass(frozen=True)
class MessageTemplate:
    """Subject and body with ``{{TOKEN}}`` placeholders."""

    subject: str
    body: str


@dataclass(frozen=True)
class TemplateVariables:
    """Values available to templates."""

    client: str
    bid_title: str
    link: str = ""
    sender_name: str = ""

    def as_tokens(self) -> dict[str, str]:
        return {
            "CLIENT": self.client,
            "BID": self.bid_title,
            "TITLE": self.bid_title,
            "LINK": self.link,
            "SENDER": self.sender_name,
        }


@dataclass(frozen=True)
class RenderedMessage:
    subject: str
    body: str


class TemplateRenderer:
    """
    Literal token replacement.

    Unknown tokens are left as written; they point at a template authoring
    mistake, not at a delivery problem.
    """

    def substitute(self, text: str, tokens: dict[str, str]) -> str:
        def replace(match: re.Match) -> str:
            value = tokens.get(match.group(1).upper())
            return match.group(0) if value is None else value

        return TOKEN_PATTERN.sub(replace, text or "")

    def render(self, template: MessageTemplate, variables: TemplateVariables) -> RenderedMessage:
        tokens = variables.as_tokens()
        return RenderedMessage(
            subject=self.substitute(template.subject, tokens).strip(),
            body=self.substitute(template.body, tokens),
        )


# Singleton instance
template_renderer = TemplateRenderer()
