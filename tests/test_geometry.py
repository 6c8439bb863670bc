import pytest

from dualpng.services.geometry import PlacementRect, aspect_fit, scale_to_aspect_fit

EPS = 1e-9


def test_same_aspect_fills_destination():
	assert aspect_fit(100, 50, 200, 100) == PlacementRect(0.0, 0.0, 200.0, 100.0)


def test_wide_source_is_width_constrained():
	assert scale_to_aspect_fit(200, 100, 100, 100) == 0.5
	assert aspect_fit(200, 100, 100, 100) == PlacementRect(0.0, 25.0, 100.0, 50.0)


def test_tall_source_is_height_constrained():
	assert scale_to_aspect_fit(100, 200, 100, 100) == 0.5
	assert aspect_fit(100, 200, 100, 100) == PlacementRect(25.0, 0.0, 50.0, 100.0)


def test_small_source_is_scaled_up():
	rect = aspect_fit(10, 10, 100, 50)
	assert rect == PlacementRect(25.0, 0.0, 50.0, 50.0)


@pytest.mark.parametrize(
	"src, dst",
	[
		((1, 1), (1, 1)),
		((3, 7), (7, 3)),
		((640, 480), (1920, 1080)),
		((1080, 1920), (1920, 1920)),
		((13, 17), (29, 31)),
		((1, 999), (500, 2)),
		((4000, 3), (4000, 3000)),
	],
)
def test_fit_is_contained_centered_and_keeps_aspect(src, dst):
	sw, sh = src
	dw, dh = dst
	rect = aspect_fit(sw, sh, dw, dh)
	assert rect.x >= -EPS and rect.y >= -EPS
	assert rect.x + rect.width <= dw + 1e-6
	assert rect.y + rect.height <= dh + 1e-6
	assert rect.width / rect.height == pytest.approx(sw / sh, rel=1e-9)
	# centered
	assert rect.x + rect.width / 2 == pytest.approx(dw / 2)
	assert rect.y + rect.height / 2 == pytest.approx(dh / 2)
	# largest: one side touches the destination
	assert rect.width == pytest.approx(dw) or rect.height == pytest.approx(dh)


def test_pixel_box_rounds_half_up():
	box = PlacementRect(0.5, 24.5, 99.0, 50.0).to_pixel_box(100, 100)
	assert box == (1, 25, 100, 75)


def test_pixel_box_is_clamped_and_never_empty():
	assert PlacementRect(10.2, 10.2, 0.1, 0.1).to_pixel_box(20, 20) == (10, 10, 11, 11)
	assert PlacementRect(-0.4, -0.4, 20.9, 20.9).to_pixel_box(20, 20) == (0, 0, 20, 20)
