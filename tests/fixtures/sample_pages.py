"""Sample Confluence view-format pages for testing.

These fixtures represent page bodies as returned with body-format=view:
rendered HTML carrying Confluence layout wrappers and macro output
(status lozenges, Jira issue macros, user links, tables of contents).
"""

# Page with layout wrapper, inline macros, a wrapped table and noise
SAMPLE_PAGE_VIEW = """
<div class="contentLayout2">
  <div class="toc-macro"></div>
  <h2>Overview</h2>
  <p>Status: <span class="status-macro aui-lozenge">LIVE</span></p>
  <p><strong>Bold</strong> <em>Italic</em> <del>Old</del> and <code>inline()</code></p>
  <p><a class="confluence-userlink" href="/wiki/display/~abc">Jane Doe</a> updated <span class="confluence-jim-macro" data-jira-key="CF-42"><a href="https://jira.example/browse/CF-42">CF-42</a></span> on <time datetime="2025-10-01">01 Oct 2025</time></p>
  <div class="table-wrap">
    <table>
      <thead><tr><th>Name</th><th>Value</th></tr></thead>
      <tbody><tr><td>A</td><td>1</td></tr></tbody>
    </table>
  </div>
  <p><a href="https://example.com/path?atlOrigin=abc">https://example.com/path?atlOrigin=abc</a></p>
  <p><img alt="Diagram" src="/wiki/download/attachments/1/diag.png"/></p>
</div>"""

SAMPLE_PAGE_VIEW_MARKDOWN = (
    "## Overview\n"
    "\n"
    "Status: [LIVE]\n"
    "\n"
    "**Bold** _Italic_ ~~Old~~ and `inline()`\n"
    "\n"
    "Jane Doe updated CF-42 on 2025-10-01\n"
    "\n"
    "| Name | Value |\n"
    "| --- | --- |\n"
    "| A | 1 |\n"
    "\n"
    "https://example.com/path"
)

# Page dominated by auto-generated macro output
SAMPLE_PAGE_NOISY = """
<div>
  <p>Important intro.</p>
  <div class="recently-updated conf-macro output-block">
    <ul><li>Very long noisy feed item 1</li><li>Very long noisy feed item 2</li></ul>
  </div>
  <div class="plugin-contributors conf-macro output-block">
    <ul><li>Alice</li><li>Bob</li></ul>
  </div>
  <p>Important outro.</p>
</div>"""

# Table whose cell uses <br> line breaks
SAMPLE_TABLE_LINE_BREAKS = """
<table>
  <thead><tr><th>Field</th><th>Details</th></tr></thead>
  <tbody>
    <tr><td>Example</td><td>Line one<br>Line two<br/>Line three</td></tr>
  </tbody>
</table>"""

# Two-column page layout with a list in one column
SAMPLE_PAGE_LAYOUT = """
<div class="contentLayout2">
  <div class="columnLayout two-equal" data-layout="two-equal">
    <div class="cell normal" data-type="normal">
      <div class="innerCell">
        <h3>Left</h3>
        <ul>
          <li>Alpha</li>
          <li>Beta</li>
        </ul>
      </div>
    </div>
    <div class="cell normal" data-type="normal">
      <div class="innerCell">
        <p>Right side</p>
      </div>
    </div>
  </div>
</div>"""

# Confluence code macro output
SAMPLE_CODE_PANEL = """
<div class="code panel pdl" style="border-width: 1px;">
  <div class="codeHeader panelHeader pdl"><b>example.py</b></div>
  <div class="codeContent panelContent pdl">
<pre class="syntaxhighlighter-pre" data-syntaxhighlighter-params="brush: py; gutter: false; theme: Confluence" data-theme="Confluence">def hello():
    return "hi"</pre>
  </div>
</div>"""

SAMPLE_CODE_PANEL_MARKDOWN = (
    "**example.py**\n"
    "\n"
    "```py\n"
    "def hello():\n"
    "    return \"hi\"\n"
    "```"
)

# Table with column metadata and a multi-paragraph cell
SAMPLE_TABLE_WITH_COLGROUP = """
<div class="table-wrap">
<table class="confluenceTable">
  <colgroup><col style="width: 120px;"/><col style="width: 300px;"/></colgroup>
  <tbody>
    <tr><th class="confluenceTh">Owner</th><th class="confluenceTh">Notes</th></tr>
    <tr>
      <td class="confluenceTd"><a class="confluence-userlink user-mention" href="/wiki/people/42">Bob Smith</a></td>
      <td class="confluenceTd"><p>First note</p><p>Second note</p></td>
    </tr>
  </tbody>
</table>
</div>"""

SAMPLE_TABLE_WITH_COLGROUP_MARKDOWN = (
    "| Owner | Notes |\n"
    "| --- | --- |\n"
    "| Bob Smith | First note / Second note |"
)
