from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional, Dict, Any, Tuple


class Record(BaseModel):
    """Immutable record; serializes with camelCase keys"""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


# ============ Product Input ============
class Specification(Record):
    name: str
    value: str
    unit: Optional[str] = None


class ProductInfo(Record):
    title: str = ""
    description: str = ""
    category: Optional[str] = None
    price: Optional[float] = None
    keywords: Tuple[str, ...] = ()
    specifications: Tuple[Specification, ...] = ()


# ============ Platform Rules ============
class TitleRange(Record):
    min: int
    max: int


class PlatformRules(Record):
    name: str
    title_range: TitleRange
    min_description: int
    max_tags: int
    tag_format: str
    guidelines: Tuple[str, ...] = ()
    prohibited_words: Tuple[str, ...] = ()
    formatting: Dict[str, str] = Field(default_factory=dict)
    content_restrictions: Tuple[str, ...] = ()


class AlgorithmFactors(Record):
    platform: str
    ranking_factors: Dict[str, float]
    optimization_weights: Dict[str, float]


# ============ Keywords ============
class KeywordSet(Record):
    primary: Tuple[str, ...] = ()
    secondary: Tuple[str, ...] = ()
    long_tail: Tuple[str, ...] = ()
    synonyms: Tuple[str, ...] = ()
    competitors: Tuple[str, ...] = ()


class CompetitorKeywords(Record):
    platform: str
    keywords: Tuple[str, ...]
    frequency: Dict[str, int]


# ============ Content Stages ============
class BaseContent(Record):
    title: str
    description: str
    keywords: Tuple[str, ...] = ()
    category: Optional[str] = None
    specifications: Tuple[Specification, ...] = ()


class SEOScore(Record):
    overall: int
    keyword_relevance: int
    title_optimization: int
    description_quality: int
    tag_effectiveness: int
    mobile_optimization: int


class KeywordOptimizedContent(BaseContent):
    optimized_title: str
    optimized_description: str
    integrated_keywords: KeywordSet
    keyword_density: Dict[str, float] = Field(default_factory=dict)


class OptimizedContent(KeywordOptimizedContent):
    tags: Tuple[str, ...] = ()
    seo_score: Optional[SEOScore] = None
    improvements: Tuple[str, ...] = ()


# ============ Compliance ============
class ComplianceViolation(Record):
    type: str  # formatting | prohibited_word | structure
    severity: str  # error | warning | info
    message: str
    location: str
    suggestion: str = ""


class ComplianceRecommendation(Record):
    category: str
    description: str
    action: str
    priority: str  # High | Medium | Low


class ComplianceResult(Record):
    violations: Tuple[ComplianceViolation, ...] = ()
    recommendations: Tuple[ComplianceRecommendation, ...] = ()
    passed: bool = True
    score: int = 100


# ============ Platform Output ============
class PlatformOptimizedContent(Record):
    platform: str
    title: str
    description: str
    tags: Tuple[str, ...] = ()
    bullet_points: Tuple[str, ...] = ()
    attributes: Dict[str, Any] = Field(default_factory=dict)


class ListingFormatting(Record):
    title_length: int
    description_length: int
    tag_count: int
    bullet_point_count: int


class FormattedListing(Record):
    platform: str
    content: PlatformOptimizedContent
    formatting: ListingFormatting
    compliance: ComplianceResult


class OptimizationResult(Record):
    platform: str
    content: OptimizedContent
    listing: FormattedListing
    keywords: KeywordSet
    seo_score: SEOScore
    quick_score: int


# ============ Listing Sources ============
class ImageAnalysis(Record):
    main_features: Tuple[str, ...] = ()
    colors: Tuple[str, ...] = ()
    style: str = "contemporary"
    quality: str = "high-quality"
    confidence: float = 0.0


class ScrapedListing(Record):
    url: str
    title: str
    description: str
    price: Optional[str] = None
    images: Tuple[str, ...] = ()
    platform: Optional[str] = None
    bullets: Tuple[str, ...] = ()
    specifications: Dict[str, str] = Field(default_factory=dict)
    brand: Optional[str] = None
    rating: Optional[str] = None
    review_count: Optional[str] = None


# ============ Generation ============
class GeneratedListing(Record):
    title: str
    bullets: Tuple[str, ...]
    description: str
    keywords: Tuple[str, ...]
    platform_notes: str = ""


class GenerationRequest(Record):
    platform: str
    mode: str
    product_data: ProductInfo
    image_analysis: Optional[ImageAnalysis] = None


class GenerationResult(Record):
    listing: GeneratedListing
    optimization: Optional[OptimizationResult] = None
    quality_score: Optional[SEOScore] = None
    warnings: Tuple[str, ...] = ()


# ============ Request Models ============
class SpecificationInput(BaseModel):
    name: str
    value: str
    unit: Optional[str] = None


class ProductDataInput(BaseModel):
    title: str = ""
    description: str = ""
    category: Optional[str] = None
    price: Optional[float] = None
    keywords: List[str] = []
    specifications: List[SpecificationInput] = []


class ImageAnalysisInput(BaseModel):
    mainFeatures: List[str] = []
    colors: List[str] = []
    style: str = "contemporary"
    quality: str = "high-quality"
    confidence: float = 0.0


class GenerateListingRequest(BaseModel):
    platform: Optional[str] = None
    mode: Optional[str] = None
    productData: Optional[ProductDataInput] = None
    imageAnalysis: Optional[ImageAnalysisInput] = None
    images: List[str] = []
    deepAnalysis: bool = False


class URLAnalyzeRequest(BaseModel):
    url: str = ""
    platform: Optional[str] = None


class SEOScoreRequest(BaseModel):
    platform: str
    title: str = ""
    description: str = ""
    keywords: List[str] = []
    tags: List[str] = []


class OptimizeRequest(BaseModel):
    platform: str
    productData: ProductDataInput


# ============ Response Models ============
class HealthResponse(BaseModel):
    status: str
    version: Optional[str] = None
    openai_configured: Optional[bool] = None

