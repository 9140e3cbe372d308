from textwrap import dedent

import pytest

from setup_component.scanner import InvalidSetupComponentError, scan_setup_component


TWO_COMPONENTS = dedent(
	"""
	import { h, ref } from 'vue'

	const count = ref(0)

	export const A = defineSetupComponent(() => {
		return h('div', count.value)
	})

	export const B: SetupFC = function () {
		const local = 1
		return h('span', local)
	}

	h('noop')
	"""
)


def test_scan_finds_both_shapes_in_order():
	ctx = scan_setup_component(TWO_COMPONENTS, "/src/comp.ts")
	assert ctx is not None
	assert [c.kind for c in ctx.components] == ["call", "typed"]
	assert ctx.components[0].code.startswith("() =>")
	assert ctx.components[1].code.startswith("function ()")
	assert ctx.imports == ["import { h, ref } from 'vue'"]


def test_scan_strips_block_delimiters_from_body():
	ctx = scan_setup_component(TWO_COMPONENTS, "/src/comp.ts")
	body = ctx.components[1].body
	assert not body.strip().startswith("{")
	assert "const local = 1" in body
	assert "return h('span', local)" in body


def test_scan_keeps_expression_body():
	ctx = scan_setup_component("const C: SetupFC = () => h('p')\n", "/src/c.ts")
	assert ctx.components[0].body == "h('p')"


def test_replaced_ranges_point_at_call_and_initializer():
	ctx = scan_setup_component(TWO_COMPONENTS, "/src/comp.ts")
	call, typed = ctx.components
	assert TWO_COMPONENTS[call.start:call.end].startswith("defineSetupComponent(")
	assert TWO_COMPONENTS[typed.start:typed.end] == typed.code
	assert TWO_COMPONENTS[typed.annotation_start:typed.annotation_end] == ": SetupFC"
	assert call.annotation_start is None


def test_generic_type_reference_is_recognized():
	code = "const C: SetupFC<{ msg: string }> = (props) => { return h('p', props.msg) }\n"
	ctx = scan_setup_component(code, "/src/c.ts")
	assert len(ctx.components) == 1


def test_floating_declarations_exclude_imports_exports_definitions_and_render_calls():
	ctx = scan_setup_component(TWO_COMPONENTS, "/src/comp.ts")
	assert ctx.declarations == ["const count = ref(0)"]


def test_floating_declarations_keep_source_order():
	code = dedent(
		"""
		const a = 1
		defineSetupComponent(() => { return a })
		function helper() { return b }
		let b = 2
		"""
	)
	ctx = scan_setup_component(code, "/src/order.ts")
	assert ctx.declarations == ["const a = 1", "function helper() { return b }", "let b = 2"]


def test_module_without_components_is_not_reported():
	code = "const x = 1\nconsole.log(x)\n"
	assert scan_setup_component(code, "/src/plain.ts") is None


def test_validated_module_keeps_collecting_declarations():
	validated = set()
	scan_setup_component(TWO_COMPONENTS, "/src/comp.ts", validated)
	assert validated == {"/src/comp.ts"}

	ctx = scan_setup_component("const x = 1\n", "/src/comp.ts", validated)
	assert ctx is not None
	assert ctx.components == []
	assert ctx.declarations == ["const x = 1"]


def test_unvalidated_module_never_yields_declarations():
	validated = {"/src/other.ts"}
	assert scan_setup_component("const x = 1\n", "/src/plain.ts", validated) is None


def test_unparseable_module_is_skipped():
	assert scan_setup_component("const = ;{", "/src/broken.ts") is None


def test_type_annotations_fail_to_parse_as_javascript():
	assert scan_setup_component("const C: SetupFC = () => {}\n", "/src/c.js") is None


def test_jsx_in_tsx_module():
	code = "const C: SetupFC = () => { return <div class=\"a\">hi</div> }\n"
	ctx = scan_setup_component(code, "/src/c.tsx")
	assert "<div" in ctx.components[0].body


def test_non_function_factory_argument_fails():
	code = "export default defineSetupComponent({ setup() {} })\n"
	with pytest.raises(InvalidSetupComponentError, match="defineSetupComponent: invalid setup component definition"):
		scan_setup_component(code, "/src/bad.ts")


def test_factory_call_without_argument_fails():
	with pytest.raises(InvalidSetupComponentError, match="found nothing"):
		scan_setup_component("defineSetupComponent()\n", "/src/bad.ts")


def test_non_function_typed_initializer_fails():
	with pytest.raises(InvalidSetupComponentError) as excinfo:
		scan_setup_component("const C: SetupFC = 1\n", "/src/bad.ts")
	assert "SetupFC" in str(excinfo.value)
	assert "/src/bad.ts:1" in str(excinfo.value)


def test_other_callee_is_ignored():
	code = "const C = other.defineSetupComponent(() => {})\n"
	assert scan_setup_component(code, "/src/c.ts") is None
