"""
PyroShow
Scripted, frame-driven fireworks show.

Pieces:
- Rockets with apex targeting
- Shell catalog (peony, glitter, horsetail, mine, fountains, text)
- Text rasterizer for glyph-shaped bursts
- Director timeline with one-shot and periodic triggers
- Single step() loop with fade + additive rendering
"""
