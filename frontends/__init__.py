"""
PyroShow Frontends
Renderers for different display modes.

DUCK TYPING EXAMPLE:
Both renderers have the same interface:
- fade()
- begin_additive()
- draw_rocket(rocket)
- draw_particle(particle)
- end_frame()
- resize(width, height)
- handle_input() -> dict
- cleanup()

No shared base class needed! Just swap them:

    # Real window
    renderer = PygameRenderer(viewport)

    # Or without a display
    renderer = HeadlessRenderer()

    # The loop works with either:
    step(state, renderer)
"""

# Note: Don't import renderers here to avoid importing pygame
# when it might not be needed. Import directly in main.py instead.
