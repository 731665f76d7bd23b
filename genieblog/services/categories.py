"""Static blog category metadata.

Defined once at import and never mutated; ``all`` is the catch-all used for
the unfiltered listing and as the fallback for unknown keys.
"""

from types import MappingProxyType

from genieblog.models.blog import CategoryMeta

ALL_CATEGORY = "all"

CATEGORY_ORDER: tuple[str, ...] = (
    "all",
    "guides",
    "updates",
    "comparisons",
    "insights",
    "story",
    "use-cases",
    "resources",
)

CATEGORY_META = MappingProxyType(
    {
        meta.key: meta
        for meta in (
            CategoryMeta(
                key="all",
                label="All",
                description="Social media automation insights, guides, comparisons, and product updates.",
                badge_class="bg-slate-100 text-slate-700 border-slate-200",
                pill_class="bg-slate-100 text-slate-700 hover:bg-slate-200",
            ),
            CategoryMeta(
                key="guides",
                label="Guides",
                description="Step-by-step playbooks to launch and scale your social automation workflows.",
                badge_class="bg-blue-100 text-blue-700 border-blue-200",
                pill_class="bg-blue-100 text-blue-700 hover:bg-blue-200",
            ),
            CategoryMeta(
                key="updates",
                label="Updates",
                description="Product launches, release notes, and roadmap updates from the SuiteGenie team.",
                badge_class="bg-emerald-100 text-emerald-700 border-emerald-200",
                pill_class="bg-emerald-100 text-emerald-700 hover:bg-emerald-200",
            ),
            CategoryMeta(
                key="comparisons",
                label="Comparisons",
                description="Head-to-head analysis of SuiteGenie versus major social media tools.",
                badge_class="bg-violet-100 text-violet-700 border-violet-200",
                pill_class="bg-violet-100 text-violet-700 hover:bg-violet-200",
            ),
            CategoryMeta(
                key="insights",
                label="Insights",
                description="Data-backed trends and practical strategy insights for growth teams.",
                badge_class="bg-cyan-100 text-cyan-700 border-cyan-200",
                pill_class="bg-cyan-100 text-cyan-700 hover:bg-cyan-200",
            ),
            CategoryMeta(
                key="story",
                label="Story",
                description="Behind-the-scenes stories from building SuiteGenie and scaling the platform.",
                badge_class="bg-amber-100 text-amber-700 border-amber-200",
                pill_class="bg-amber-100 text-amber-700 hover:bg-amber-200",
            ),
            CategoryMeta(
                key="use-cases",
                label="Use Cases",
                description="Real-world workflows from agencies, creators, and startup teams.",
                badge_class="bg-rose-100 text-rose-700 border-rose-200",
                pill_class="bg-rose-100 text-rose-700 hover:bg-rose-200",
            ),
            CategoryMeta(
                key="resources",
                label="Resources",
                description="Templates, checklists, and resources to improve social media operations.",
                badge_class="bg-indigo-100 text-indigo-700 border-indigo-200",
                pill_class="bg-indigo-100 text-indigo-700 hover:bg-indigo-200",
            ),
        )
    }
)


def is_known_category(key: str) -> bool:
    """True for real post categories (``all`` is not one)."""
    return key != ALL_CATEGORY and key in CATEGORY_META


def get_category_meta(key: str) -> CategoryMeta:
    return CATEGORY_META.get(key) or CATEGORY_META[ALL_CATEGORY]


def ordered_categories() -> list[CategoryMeta]:
    return [CATEGORY_META[key] for key in CATEGORY_ORDER]
