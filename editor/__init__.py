"""
editor — sesja edycji szablonu: wczytanie rekordu, wstawianie tokenów,
formatowanie, podgląd i zapis.

Interfejs publiczny:
    TemplateEditor.new(sample=False) / TemplateEditor.from_record(record, defaults)
    editor.insert(tag), editor.insert_at(position, tag), editor.apply_mark(path, mark)
    editor.author_view(), editor.preview(), editor.write_capture(key, value)
    editor.to_record()
"""

from .session import Position, TemplateEditor

__all__ = ["Position", "TemplateEditor"]
