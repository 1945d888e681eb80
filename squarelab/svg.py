# svg.py
# simple SVG writer for square labels over the binarised image

import math

def label_font_size(area: int) -> float:
    """0.6·sqrt(area), clamped to [20, 150]."""
    return max(20.0, min(0.6 * math.sqrt(area), 150.0))

def label_text(x, y, size, text="4", fill="red"):
    return (f'<text x="{x:.2f}" y="{y:.2f}" font-family="Arial" font-weight="bold" '
            f'font-size="{size:.1f}" fill="{fill}" text-anchor="middle" '
            f'dominant-baseline="middle">{text}</text>')

def write_label_svg(detections, size, out_path, image_href=None):
    """One label per positive detection, centred on its anchor. size = (W,H)."""
    w,h=size
    parts=[f'<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" width="{w}" height="{h}" viewBox="0 0 {w} {h}">']
    if image_href:
        parts.append(f'<image xlink:href="{image_href}" x="0" y="0" width="{w}" height="{h}" />')
    parts.append('<g>')
    for d in detections:
        if not d.verdict.is_square: continue
        x,y=d.verdict.anchor
        parts.append(label_text(x, y, label_font_size(d.features.area)))
    parts.append('</g></svg>')
    with open(out_path,'w') as f: f.write("\n".join(parts))
