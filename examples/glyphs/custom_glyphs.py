"""Swap the emoji for ASCII boxes and widen the gap."""

from casillas import CheckboxListRenderer, GlyphTable, Markdown, RenderConfig

ascii_boxes = GlyphTable({"unchecked": "[ ]", "done": "[x]", "in-progress": "[~]"})

md = Markdown(
    list_item_transform=CheckboxListRenderer(ascii_boxes),
    config=RenderConfig(hspace_em=1.0, checkbox_label="task"),
)

print(md("- [/] Draft the report\n- [-] Book the venue"))
