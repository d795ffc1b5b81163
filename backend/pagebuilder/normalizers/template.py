from .section import normalize_section_definition

def normalize_template(template, include_sections=True):
    data = {
        "id": template.id,
        "name": template.name,
    }

    if include_sections:
        data["sections"] = [
            normalize_section_definition(s)
            for s in template.sections
            if not s.is_deleted
        ]

    return data
