def normalize_section_definition(definition):
    return {
        "id": definition.id,
        "slug": definition.slug,
        "name": definition.name,
        "human_name": definition.human_name,
        "fields": definition.fields or {},
        "is_dynamic": definition.is_dynamic,
        "order": definition.order,
    }


def normalize_page_section(association, include_definition=True):
    data = {
        "uuid": association.uuid,
        "section_id": association.section_definition_id,
        "order": association.order,
        "data": association.data or {},
    }

    if include_definition and association.section is not None:
        data["section"] = normalize_section_definition(association.section)

    return data
