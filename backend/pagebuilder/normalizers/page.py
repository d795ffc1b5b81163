from .section import normalize_page_section

def normalize_page(page, include_sections=False):
    data = {
        "id": page.id,
        "title": page.title,
        "slug": page.slug,
        "folder_name": page.folder_name,
        "template": page.template.name if page.template else None,
    }

    if include_sections:
        sections = sorted(
            (s for s in page.sections if not s.is_deleted),
            key=lambda s: s.order,
        )
        data["sections"] = [normalize_page_section(s) for s in sections]

    return data
