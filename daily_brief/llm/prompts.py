"""Instruction template for the daily brief request.

The numbered instruction list and the raw data blocks follow the same section
order; the generated document's headings follow it too.
"""

MAX_BULLET_SENTENCES = 3

BRIEF_PROMPT_TEMPLATE = """Give me a crisp bullet summary (no more than {max_sentences} sentences each) of:
{instructions}

Raw feeds:
{raw_sections}

Format the response as a clean, professional daily brief using HTML with clear sections (use <h2> for headings, in the order listed above), bullet points (<ul><li>), and ensure it's mobile-friendly with sans-serif font and good spacing. For each summary bullet, include a clickable link (<a href="original_url">Read more</a>) to the source article, paper or product. Do not include any code fences like ``` in the output."""

SECTION_BLOCK_TEMPLATE = """{heading}:
{content}"""
