"""Typed AST — collect every user a message mentions."""

from dismark import BaseVisitor, Parser, UserMention


class MentionCollector(BaseVisitor[None]):
    def __init__(self) -> None:
        self.ids: list[str] = []

    def visit_user_mention(self, node: UserMention) -> None:
        self.ids.append(node.id)


doc = Parser().parse(">>> ping <@1>\n**and <@!2>**, not `<@3>`")
collector = MentionCollector()
collector.visit(doc)
print("Mentioned users:", ", ".join(collector.ids))
