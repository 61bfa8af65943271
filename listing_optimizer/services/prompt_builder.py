"""
Prompt Builder
System instruction and user prompt for listing generation
"""
from typing import Any, Dict, NamedTuple

from ..config import GENERATOR_PROHIBITED_WORDS
from ..models import GenerationRequest
from ..engines.base import format_spec_value

PLATFORM_PROMPT_CONFIG: Dict[str, Dict[str, Any]] = {
    "amazon": {
        "title_max": 200,
        "title_target": "180-200 characters (90-100% of limit)",
        "bullet_count": 5,
        "bullet_target": "150-250 characters each, ALL CAPS benefit keyword first",
        "desc_min": 1000,
        "desc_target": "1000-2000 characters, keyword-rich prose",
        "keywords_max": 15,
        "tone": "Professional, feature-focused, benefit-driven",
        "algorithm": "Amazon A10, which ranks on relevance, CTR, conversion rate and sales velocity",
        "title_format": "[Primary Keyword] + [Type/Model] + [Key Specs] + [Use Cases] + [Brand if space]",
        "special_rules": (
            "No promotional language (Sale, Best, #1). Include specific numbers (watts, dimensions, count). "
            "List compatible devices/brands. Front-load primary keyword in first 80 chars."
        ),
    },
    "etsy": {
        "title_max": 140,
        "title_target": "126-140 characters (90-100% of limit)",
        "bullet_count": 5,
        "bullet_target": "100-200 characters each, conversational tone",
        "desc_min": 400,
        "desc_target": "500-1000 characters, story-driven, personal",
        "keywords_max": 13,
        "tone": "Warm, artisanal, personal, story-driven",
        "algorithm": "Etsy Search, which ranks on listing quality score, recency, shop performance and tag match",
        "title_format": "[Item] + [Style/Material] + [Occasion] + [Recipient] + pipe separators (|)",
        "special_rules": (
            "Use pipe (|) separators. Include gift occasions (Gift for Her, Birthday Gift). "
            "Mention handmade/handcrafted. All 13 tags must be used. Tags max 20 chars each."
        ),
    },
    "shopify": {
        "title_max": 70,
        "title_target": "60-70 characters for SEO",
        "bullet_count": 5,
        "bullet_target": "100-200 characters each, benefit-first",
        "desc_min": 300,
        "desc_target": "400-800 characters, brand-voice, engaging",
        "keywords_max": 10,
        "tone": "Brand-aligned, engaging, conversion-focused",
        "algorithm": "Google SEO, which ranks on title relevance, meta description, page content and backlinks",
        "title_format": "[Brand] + [Product Name] + [Key Feature], concise and Google-friendly",
        "special_rules": (
            "Title is the SEO title tag, so keep it natural and clickable. Description should open with "
            "a meta description in first 160 chars. Include long-tail keywords naturally."
        ),
    },
    "ebay": {
        "title_max": 80,
        "title_target": "72-80 characters (90-100% of limit)",
        "bullet_count": 5,
        "bullet_target": "100-200 characters each",
        "desc_min": 300,
        "desc_target": "400-1000 characters, condition + specs focused",
        "keywords_max": 10,
        "tone": "Conversational, trust-building, detailed",
        "algorithm": "eBay Cassini, which ranks on title keyword match, item specifics, seller metrics and price",
        "title_format": "[Brand] + [Model/Type] + [Key Spec] + [Condition if used] + [Compatible With]",
        "special_rules": (
            "Include brand, model number, condition. List compatibility. Include key specs in title. "
            "No promotional terms."
        ),
    },
    "walmart": {
        "title_max": 75,
        "title_target": "68-75 characters",
        "bullet_count": 6,
        "bullet_target": "100-200 characters each",
        "desc_min": 300,
        "desc_target": "400-800 characters, family-friendly, value-focused",
        "keywords_max": 10,
        "tone": "Value-focused, family-friendly, practical",
        "algorithm": "Walmart Search, which ranks on relevance, price competitiveness, item performance and reviews",
        "title_format": "[Brand] + [Quality Descriptor] + [Item Type] + [Key Feature] + [Pack Count]",
        "special_rules": (
            "Family-friendly tone only. Emphasize value and quantity. Include pack sizes. Practical language."
        ),
    },
}

MODE_INSTRUCTIONS = {
    "optimize": """TASK: OPTIMIZE EXISTING LISTING

You have an existing product listing. Make substantial improvements, do NOT just rephrase:
- Rewrite the title to maximize SEO impact, character utilization, and click-through rate
- Rewrite ALL bullets with benefit-first structure and specific numbers/details
- Expand the description significantly with more keywords and compelling copy
- Identify and add high-value keywords the current listing is missing
- Fix any compliance issues (prohibited words, bad formatting)
- Result should be noticeably better, not a minor tweak""",
    "create": """TASK: CREATE NEW LISTING FROM SCRATCH

Build a powerful listing from zero:
- Write a title that immediately communicates value and targets high-search keywords
- Create {bullet_count} compelling bullets addressing buyer concerns and key benefits
- Write a full description that tells the product story, answers common questions, and integrates keywords naturally
- Select the most relevant, high-traffic keywords for this product type
- Think like a buyer: what would make them stop scrolling and click through?""",
    "analyze": """TASK: ANALYZE COMPETITOR/URL DATA AND OPTIMIZE

You have extracted data from a product URL. Your job is to create a dramatically better version:
- Identify all weaknesses in the current listing (thin title, missing keywords, weak bullets, short description)
- Add keywords and use cases the original listing missed entirely
- Strengthen every element with specific benefits and details
- The optimized version should clearly outperform the original
- Transform the listing rather than tweaking it""",
}


class BuiltPrompt(NamedTuple):
    system_instruction: str
    user_prompt: str


def build_prompt(request: GenerationRequest) -> BuiltPrompt:
    """
    Build the generation prompt
    Args:
        request: Validated generation request
    Returns:
        BuiltPrompt with separate system instruction and user prompt
    """
    cfg = PLATFORM_PROMPT_CONFIG[request.platform]
    return BuiltPrompt(
        system_instruction=build_system_instruction(request.platform, cfg),
        user_prompt=build_user_prompt(request, cfg),
    )


def build_system_instruction(platform: str, cfg: Dict[str, Any]) -> str:
    return f"""You are an elite e-commerce SEO specialist and conversion copywriter with 15 years of experience optimizing product listings on {platform.upper()} specifically.

YOUR EXPERTISE:
- Deep knowledge of {cfg['algorithm']}
- Conversion rate optimization (CRO) psychology
- Keyword research and strategic placement
- Benefit-driven copywriting that drives purchases

NON-NEGOTIABLE RULES:
1. TITLE: Must be {cfg['title_target']}
2. BULLETS: Exactly {cfg['bullet_count']} bullets, {cfg['bullet_target']}
3. DESCRIPTION: Minimum {cfg['desc_min']} characters, {cfg['desc_target']}
4. KEYWORDS: Up to {cfg['keywords_max']} highly relevant keywords
5. PROHIBITED WORDS, NEVER USE: {', '.join(GENERATOR_PROHIBITED_WORDS)}
6. TONE: {cfg['tone']}
7. TITLE FORMAT: {cfg['title_format']}
8. PLATFORM RULES: {cfg['special_rules']}

BULLET STRUCTURE (mandatory format):
[BENEFIT IN CAPS]: [Feature description with specific details, numbers, materials]

Example: "LONG-LASTING BATTERY: 40-hour playtime on a single charge keeps you listening through workouts, commutes, and long travel days without reaching for a charger"

QUALITY STANDARD:
- Use 90-100% of character limits
- Front-load primary keyword in first 80 characters of title
- Include specific numbers, dimensions, materials, quantities wherever possible
- Write for humans first, algorithms second; it must sound natural
- Every claim must be realistic and believable
- No keyword stuffing, natural integration only

OUTPUT RULES:
- Return ONLY valid JSON. No markdown, no preamble, no explanation.
- All strings must be properly escaped
- Do not truncate any field"""


def build_user_prompt(request: GenerationRequest, cfg: Dict[str, Any]) -> str:
    product = request.product_data
    lines = [MODE_INSTRUCTIONS[request.mode].format(bullet_count=cfg['bullet_count']), ""]

    lines.append("=== PRODUCT INFORMATION ===")
    if product.title:
        lines.append(f"Current Title: {product.title}")
    if product.description:
        lines.append(f"Current Description: {product.description}")
    if product.category:
        lines.append(f"Category: {product.category}")
    if product.price:
        lines.append(f"Price: ${product.price}")
    if product.specifications:
        lines.append("Specifications:")
        lines.extend(f"  • {spec.name}: {format_spec_value(spec)}" for spec in product.specifications)
    if product.keywords:
        lines.append(f"Target Keywords: {', '.join(product.keywords)}")

    image = request.image_analysis
    if image:
        lines.extend([
            "",
            "=== IMAGE ANALYSIS ===",
            f"Visual Features: {', '.join(image.main_features)}",
            f"Colors: {', '.join(image.colors)}",
            f"Style: {image.style}",
            f"Apparent Quality: {image.quality}",
        ])

    bullets = ",\n".join(
        '    "BENEFIT KEYWORD: detailed feature description with specifics"'
        for _ in range(cfg['bullet_count'])
    )
    lines.append(f"""
=== THINK FIRST, THEN WRITE ===
Before generating output, reason through:
1. PRIMARY KEYWORD: What exact phrase would a buyer type to find this product?
2. TOP 3 BENEFITS: What are the strongest emotional/practical benefits (not features)?
3. TARGET BUYER: Who is buying this and what do they care most about?
4. MISSING DATA: What specific details (numbers, specs, materials) should be inferred from context?

Now generate the fully optimized listing for {request.platform.upper()}.

=== REQUIRED JSON OUTPUT (return this exact structure) ===
{{
  "title": "optimized title, must be {cfg['title_target']}",
  "bullets": [
{bullets}
  ],
  "description": "full product description, minimum {cfg['desc_min']} characters",
  "keywords": ["keyword1", "keyword2", "keyword3"],
  "platform_notes": "1-2 sentences on the key optimization decisions made"
}}""")
    return "\n".join(lines)
