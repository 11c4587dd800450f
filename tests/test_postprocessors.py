from bs4 import BeautifulSoup

from mdengine.placeholders import CODEBLOCK, ESCAPE, get_placeholder_table
from mdengine.postprocessors.math_converter import convert_math
from mdengine.postprocessors.restorer import restore_placeholders
from mdengine.postprocessors.sanitizer import sanitize_html


def test_restore_placeholders():
    context = {}
    table = get_placeholder_table(context)
    block = table.add(CODEBLOCK, "<pre><code>x</code></pre>")
    star = table.add(ESCAPE, "&#42;")
    html = f"<p>{star}</p>\n{block}"
    assert restore_placeholders(html, context) == "<p>&#42;</p>\n<pre><code>x</code></pre>"


def test_block_math_paragraph():
    assert convert_math("<p>$$x^2$$</p>", {}) == '<div class="math-block">x^2</div>'


def test_block_math_line_breaks():
    assert convert_math("<p>$$a<br>\nb$$</p>", {}) == '<div class="math-block">a\nb</div>'


def test_inline_math():
    html = convert_math("<p>a $b$ c</p>", {})
    assert html == '<p>a <span class="math-inline">b</span> c</p>'


def test_math_skips_code_and_diagrams():
    html = '<code>$x$</code> $y$ <pre><code>$$z$$</code></pre><div class="mermaid">$w$</div>'
    assert convert_math(html, {}) == (
        '<code>$x$</code> <span class="math-inline">y</span> '
        '<pre><code>$$z$$</code></pre><div class="mermaid">$w$</div>'
    )


def test_lone_dollar_is_text():
    assert convert_math("<p>costs $5</p>", {}) == "<p>costs $5</p>"


def test_math_leaves_attributes_alone():
    html = '<p><a href="/?a=$1&amp;b=$2" title="$t$">pay</a> <img src="x.png" alt="$5 to $6"></p>'
    assert convert_math(html, {}) == html


def test_sanitize_drops_unsafe_protocols():
    html = sanitize_html('<a href="javascript:alert(1)">x</a> <a href="java&#115;cript:x">y</a>', {})
    assert html == "<a>x</a> <a>y</a>"


def test_sanitize_keeps_generated_markup():
    html = (
        '<h2 id="a-b">A <code>b</code></h2>\n'
        '<ol start="3">\n<li><input type="checkbox" disabled> t\n</li>\n</ol>\n'
        '<p><a href="#fn1" id="fnref1">1</a> <a href="mailto:a@b.c">m</a> <mark>h</mark></p>\n'
        '<div class="plantuml" data-code="A -&gt; B&#10;C">[PlantUML Diagram]</div>'
    )
    assert sanitize_html(html, {}) == html


def test_sanitize_removes_unknown_attributes_and_styles():
    doc = BeautifulSoup(
        sanitize_html('<table><tr><td style="text-align: right; color: red" onclick="x">1</td></tr></table>', {}),
        "html.parser",
    )
    cell = doc.find("td")
    assert not cell.has_attr("onclick")
    assert cell["style"].rstrip(";") == "text-align: right"
