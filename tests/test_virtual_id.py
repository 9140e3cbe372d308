from setup_component.virtual_id import (
	build_virtual_id,
	decode_virtual_id,
	is_sub_module,
	is_virtual_id,
	normalize_path,
)


def test_build_and_decode():
	virtual_id = build_virtual_id("/src/a.ts", 3)
	assert virtual_id == "/src/a.ts__setup_component_3.vue"
	assert decode_virtual_id(virtual_id) == ("/src/a.ts", 3)


def test_decode_rejects_plain_ids():
	assert decode_virtual_id("/src/a.ts") is None
	assert decode_virtual_id("/src/a.ts__setup_component_x.vue") is None
	assert not is_virtual_id(None)
	assert not is_virtual_id("/src/App.vue")


def test_nested_virtual_ids_decode_one_level():
	assert decode_virtual_id("/a.ts__setup_component_0.vue__setup_component_2.vue") == (
		"/a.ts__setup_component_0.vue",
		2,
	)


def test_normalize_path():
	assert normalize_path("C:\\proj\\src\\..\\a.ts") == "C:/proj/a.ts"
	assert normalize_path("//proj/./a.ts") == "/proj/a.ts"


def test_is_sub_module():
	assert is_sub_module("/p/a.ts__setup_component_0.vue", "/p/a.ts")
	assert not is_sub_module("/p/b.ts__setup_component_0.vue", "/p/a.ts")
	assert not is_sub_module("/p/a.ts", "/p/a.ts")
	assert is_sub_module("/a.ts__setup_component_0.vue", "/p/a.ts", root="/p")
