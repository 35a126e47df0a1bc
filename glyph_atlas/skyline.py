"""
Skyline bottom-left rectangle packing.

The skyline is the top edge of everything placed so far, stored as
left-to-right segments [x, y, width] covering the whole canvas width. Each
rectangle goes to the lowest position where it fits, leftmost on ties.
Rectangles are placed tallest first; their list order is not changed.
"""


def _fit_height(skyline, index, w, canvas_w):
    """Lowest y at which a rect of width w can sit starting at segment index"""
    x = skyline[index][0]
    if x + w > canvas_w:
        return None

    y = 0
    remaining = w
    while remaining > 0:
        _, seg_y, seg_w = skyline[index]
        y = max(y, seg_y)
        remaining -= seg_w
        index += 1
    return y


def _place(skyline, index, w, h, y):
    x = skyline[index][0]
    end = x + w

    i = index
    while i < len(skyline) and skyline[i][0] < end:
        seg_x, seg_y, seg_w = skyline[i]
        if seg_x + seg_w <= end:
            del skyline[i]
        else:
            skyline[i] = [end, seg_y, seg_x + seg_w - end]
            break
    skyline.insert(index, [x, y + h, w])

    # Merge neighbours at the same height
    i = 0
    while i < len(skyline) - 1:
        if skyline[i][1] == skyline[i + 1][1]:
            skyline[i][2] += skyline[i + 1][2]
            del skyline[i + 1]
        else:
            i += 1
    return x


def pack_rects(rects, width, height):
    """
    Place rects inside a width x height canvas.

    Sets x, y and packed on every rect. Returns True only when all of them
    were placed.
    """
    if not rects:
        return True
    if width <= 0 or height <= 0:
        for rect in rects:
            rect.packed = False
        return False

    skyline = [[0, 0, width]]
    order = sorted(range(len(rects)), key=lambda i: (-rects[i].h, -rects[i].w, i))

    all_packed = True
    for i in order:
        rect = rects[i]
        best = None
        for index in range(len(skyline)):
            y = _fit_height(skyline, index, rect.w, width)
            if y is None:
                break
            if y + rect.h > height:
                continue
            if best is None or y < best[1]:
                best = (index, y)

        if best is None:
            rect.packed = False
            all_packed = False
            continue

        index, y = best
        rect.x = _place(skyline, index, rect.w, rect.h, y)
        rect.y = y
        rect.packed = True

    return all_packed
