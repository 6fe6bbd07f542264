"""Walk the parsed AST and count items per checkbox state."""

from collections import Counter

from casillas import BaseVisitor, ListItem, classify, parse


class StateCounter(BaseVisitor[None]):
    def __init__(self) -> None:
        self.counts: Counter[str] = Counter()

    def visit_list_item(self, node: ListItem) -> None:
        marker = classify(node.body)
        self.counts[marker.name.lower() if marker else "plain"] += 1


source = """- [x] Buy milk
- [ ] Call the plumber
- [/] Draft the report
  - [x] Outline
  - [ ] Numbers
- [-] Book the venue
- Remember the umbrella
"""

counter = StateCounter()
counter.visit(parse(source))
for state, count in sorted(counter.counts.items()):
    print(f"{state:12} {count}")
