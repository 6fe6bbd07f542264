"""Render a todo list to HTML and to plain text."""

from casillas import Markdown

source = """# Weekend

- [x] Buy milk
- [ ] Call the plumber
- [/] Draft the report
  - [x] Outline
  - [ ] Numbers
- [-] Book the venue
"""

md = Markdown()
doc = md.parse(source)

print(md.render(doc))
print(md.render_text(doc))
