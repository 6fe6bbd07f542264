"""Report checkbox-shaped items whose marker is not recognised."""

from casillas import find_unrecognized_markers, parse
from casillas.checkbox import literal

source = """- [x] Buy milk
- [?] Water the plants
- [X] Pay rent
- [ ] Call the plumber
"""

doc = parse(source, source_file="todo.md")

for item in find_unrecognized_markers(doc):
    marker = literal(item.body.children[1])
    print(f"{item.location}: unrecognised checkbox marker [{marker}]")
