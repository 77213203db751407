from .parser import (
    parse_slml as parse_slml,
    serialize_screen as serialize_screen,
    Element as Element,
    Screen as Screen,
    ScreenDefaults as ScreenDefaults,
    DEFAULT_SCREEN as DEFAULT_SCREEN,
)
from .markdown import (
    extract_blocks as extract_blocks,
    process_markdown as process_markdown,
)
from .generator import (
    render_block as render_block,
    render_markdown as render_markdown,
    replace_slml_with_svg as replace_slml_with_svg,
)
from .generation import (
    RenderConfig as RenderConfig,
    RenderedScreen as RenderedScreen,
    ImageSlot as ImageSlot,
    render_screen as render_screen,
    render_screen_svg as render_screen_svg,
    enrich_images as enrich_images,
    apply_image_patch as apply_image_patch,
)
from .icons import IconCatalog as IconCatalog
from .validation import (
    validate_screen as validate_screen,
    validate_screens as validate_screens,
    ValidationIssue as ValidationIssue,
    ValidationResult as ValidationResult,
)
