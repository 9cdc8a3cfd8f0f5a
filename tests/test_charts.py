from logic import charts

BG = charts.BG


def _blank(img):
    return img.getcolors() == [(img.width * img.height, BG)]


def test_bar_chart_size_and_mode():
    img = charts.bar_chart([("Consumer", 0.92), ("Contract", 0.06)], size=(400, 120))
    assert img.size == (400, 120)
    assert img.mode == "RGBA"
    assert not _blank(img)


def test_bar_chart_counts():
    img = charts.bar_chart([("Mon", 45), ("Tue", 52)], percentage=False)
    assert img.size == (420, 150)
    assert not _blank(img)


def test_empty_inputs_give_blank_images():
    assert _blank(charts.bar_chart([]))
    assert _blank(charts.line_chart([]))
    assert _blank(charts.stage_bar([], 0))


def test_gauge_size():
    img = charts.gauge_chart(88, size=200)
    assert img.size == (200, 130)


def test_gauge_clamps_out_of_range():
    assert charts.gauge_chart(150).size == charts.gauge_chart(100).size
    charts.gauge_chart(-5)


def test_line_chart_single_point():
    img = charts.line_chart([("T0", 50)])
    assert img.size == (420, 180)
    assert not _blank(img)


def test_progress_bar_fill():
    full = charts.progress_bar(100, size=(300, 14), variant="success")
    empty = charts.progress_bar(0, size=(300, 14), variant="success")
    assert full.getpixel((150, 7)) == (34, 197, 94, 255)
    assert empty.getpixel((150, 7)) == (31, 41, 55, 255)


def test_progress_bar_half():
    half = charts.progress_bar(50, size=(300, 14), variant="primary")
    assert half.getpixel((60, 7)) == (59, 130, 246, 255)
    assert half.getpixel((240, 7)) == (31, 41, 55, 255)


def test_stage_bar_marks_current():
    img = charts.stage_bar(["a", "b", "c", "d"], 2, size=(400, 50))
    assert img.getpixel((50, 9)) == (245, 158, 11, 255)     # passed
    assert img.getpixel((250, 9)) == (239, 68, 68, 255)     # current
    assert img.getpixel((350, 9)) == (31, 41, 55, 255)      # ahead
