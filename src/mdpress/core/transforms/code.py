"""Attach class and data-attribute hints to code blocks"""

from mdpress.core.nodes import Code, Root, walk


CODE_BLOCK_CLASS = 'code-block'
LINE_NUMBERS_CLASS = 'line-numbers'


def decorate_code_blocks(tree: Root, line_numbers: bool = False) -> Root:
    """Add code-block/language-* classes and data-language (plus line count hints when enabled)."""
    for node, _, _ in walk(tree):
        if not isinstance(node, Code):
            continue
        classes = list(node.data.get('class', []))
        classes.append(CODE_BLOCK_CLASS)
        if node.lang:
            classes.append(f'language-{node.lang}')
            node.data['data-language'] = node.lang
        if line_numbers and node.value:
            node.data['data-line-count'] = len(node.value.split('\n'))
            classes.append(LINE_NUMBERS_CLASS)
        node.data['class'] = classes
    return tree
