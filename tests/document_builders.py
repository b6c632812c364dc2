"""Builders for Google Docs API document fragments used across the tests."""


def text_run(content, **style):
    return {'textRun': {'content': content, 'textStyle': style}}


def code_run(content):
    return text_run(content, weightedFontFamily={'fontFamily': 'Consolas', 'weight': 400})


def image_run(object_id):
    return {'inlineObjectElement': {'inlineObjectId': object_id}}


def footnote_ref(footnote_id, number):
    return {'footnoteReference': {'footnoteId': footnote_id, 'footnoteNumber': number}}


def horizontal_rule():
    return {'horizontalRule': {}}


def paragraph(*elements, style='NORMAL_TEXT', indent=None, bullet=None):
    paragraph_style = {'namedStyleType': style}
    if indent is not None:
        paragraph_style['indentStart'] = {'magnitude': indent, 'unit': 'PT'}
    node = {'elements': list(elements), 'paragraphStyle': paragraph_style}
    if bullet is not None:
        node['bullet'] = bullet
    return {'paragraph': node}


def list_item(text, list_id='list-1', level=0):
    bullet = {'listId': list_id}
    if level:
        bullet['nestingLevel'] = level
    return paragraph(text_run(text + "\n"), bullet=bullet)


def cell(*paragraphs):
    return {'content': list(paragraphs)}


def table(*rows):
    """Each row is a list of cells."""
    columns = max((len(row) for row in rows), default=0)
    return {
        'table': {
            'rows': len(rows),
            'columns': columns,
            'tableRows': [{'tableCells': list(row)} for row in rows],
        }
    }


def inline_image(source, title=None, description=None):
    embedded = {'imageProperties': {'contentUri': source}}
    if title is not None:
        embedded['title'] = title
    if description is not None:
        embedded['description'] = description
    return {'inlineObjectProperties': {'embeddedObject': embedded}}


def ordered_list(levels=3):
    return {'listProperties': {'nestingLevels': [{'glyphType': 'DECIMAL'} for _ in range(levels)]}}


def unordered_list(levels=3):
    return {'listProperties': {'nestingLevels': [{'glyphSymbol': '●'} for _ in range(levels)]}}


def document(*content, **extras):
    doc = {
        'documentId': extras.pop('document_id', 'doc-1'),
        'title': extras.pop('title', 'Test Document'),
        'body': {'content': list(content)},
    }
    doc.update(extras)
    return doc
