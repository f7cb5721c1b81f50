# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
from codemetrics.syntax import (
    BinaryOperator,
    Block,
    CatchClause,
    Conditional,
    Loop,
    MethodDeclaration,
    OtherNode,
    Switch,
    SwitchSection,
    TryStatement,
)
from codemetrics.visitor import ComplexityVisitor


def _method(*statements, name: str = "M", line: int = 1, parameters: int = 0):
    return MethodDeclaration(
        name=name,
        start_line=line,
        parameter_count=parameters,
        body=Block(statements=tuple(statements)),
    )


def _if(*children):
    return Conditional(children=(OtherNode(),) + tuple(children))


def _measure_one(method: MethodDeclaration, nested_callables: str = "separate"):
    visitor = ComplexityVisitor(nested_callables=nested_callables)  # type: ignore[arg-type]
    measured = visitor.measure(OtherNode(children=(method,)))
    assert len(measured) == 1
    return measured[0]


def test_cc_001_empty_body_has_base_complexity_and_no_depth() -> None:
    measured = _measure_one(_method())

    assert measured.cyclomatic_complexity == 1
    assert measured.nesting_depth == 0


def test_cc_002_method_without_body_has_base_complexity() -> None:
    measured = _measure_one(MethodDeclaration(name="Abstract", start_line=3))

    assert measured.cyclomatic_complexity == 1
    assert measured.nesting_depth == 0


def test_cc_003_if_else_with_blocks_counts_one_and_depth_one() -> None:
    method = _method(
        OtherNode(),
        Conditional(
            children=(
                BinaryOperator(operator=">", left=OtherNode(), right=OtherNode()),
                Block(statements=(OtherNode(),)),
                Block(statements=(OtherNode(),)),
            )
        ),
    )

    measured = _measure_one(method)

    assert measured.cyclomatic_complexity == 2
    assert measured.nesting_depth == 1


def test_cc_004_loops_count_once_each_and_nest_blocks() -> None:
    method = _method(
        Loop(children=(OtherNode(), Block(statements=(Loop(children=(Block(),)),)))),
        Loop(children=(Block(),)),
    )

    measured = _measure_one(method)

    assert measured.cyclomatic_complexity == 4
    assert measured.nesting_depth == 2


def test_cc_005_sibling_blocks_do_not_accumulate_depth() -> None:
    method = _method(Block(), Block(), Block(statements=(Block(),)))

    measured = _measure_one(method)

    assert measured.nesting_depth == 2


def test_cc_006_switch_counts_construct_plus_non_default_labels() -> None:
    switch = Switch(
        sections=(
            SwitchSection(case_labels=1, statements=(OtherNode(),)),
            SwitchSection(case_labels=2, statements=(OtherNode(),)),
            SwitchSection(has_default=True, statements=(OtherNode(),)),
        )
    )

    measured = _measure_one(_method(switch))

    assert measured.cyclomatic_complexity == 1 + 3 + 1


def test_cc_007_empty_switch_costs_one() -> None:
    measured = _measure_one(_method(Switch()))

    assert measured.cyclomatic_complexity == 2


def test_cc_008_switch_section_statements_are_visited() -> None:
    switch = Switch(
        sections=(
            SwitchSection(
                case_labels=1,
                statements=(_if(Block()),),
            ),
        )
    )

    measured = _measure_one(_method(switch))

    assert measured.cyclomatic_complexity == 1 + 2 + 1
    assert measured.nesting_depth == 1


def test_cc_009_try_counts_catch_clauses_regardless_of_finally() -> None:
    catches = (CatchClause(body=Block()), CatchClause(body=Block()))
    with_finally = TryStatement(body=Block(), catches=catches, finally_body=Block())
    without_finally = TryStatement(body=Block(), catches=catches)

    assert _measure_one(_method(with_finally)).cyclomatic_complexity == 3
    assert _measure_one(_method(without_finally)).cyclomatic_complexity == 3


def test_cc_010_try_without_catch_adds_nothing_but_visits_all_blocks() -> None:
    statement = TryStatement(
        body=Block(statements=(_if(),)),
        finally_body=Block(statements=(Block(),)),
    )

    measured = _measure_one(_method(statement))

    assert measured.cyclomatic_complexity == 2
    assert measured.nesting_depth == 2


def test_cc_011_logical_operators_count_per_occurrence() -> None:
    condition = BinaryOperator(
        operator="&&",
        left=BinaryOperator(operator="||", left=OtherNode(), right=OtherNode()),
        right=BinaryOperator(operator="==", left=OtherNode(), right=OtherNode()),
    )

    measured = _measure_one(_method(_if(condition, Block())))

    assert measured.cyclomatic_complexity == 1 + 1 + 2


def test_cc_012_reordering_independent_siblings_keeps_complexity() -> None:
    first = _if(Block(statements=(Loop(children=(Block(),)),)))
    second = Switch(sections=(SwitchSection(case_labels=2),))

    forward = _measure_one(_method(first, second))
    backward = _measure_one(_method(second, first))

    assert forward.cyclomatic_complexity == backward.cyclomatic_complexity


def test_cc_013_parameter_and_declaration_facts_are_carried() -> None:
    measured = _measure_one(_method(name="foo", line=7, parameters=3))

    assert measured.declaration.name == "foo"
    assert measured.declaration.start_line == 7
    assert measured.declaration.parameter_count == 3


def test_cc_014_sibling_methods_do_not_share_state() -> None:
    busy = _method(_if(Block(statements=(Block(),))), name="Busy")
    idle = _method(name="Idle")

    measured = ComplexityVisitor().measure(
        OtherNode(children=(OtherNode(children=(busy, idle)),))
    )

    assert [(m.declaration.name, m.cyclomatic_complexity, m.nesting_depth) for m in measured] == [
        ("Busy", 2, 2),
        ("Idle", 1, 0),
    ]


def _outer_with_lambda() -> MethodDeclaration:
    callback = MethodDeclaration(
        name="<lambda>",
        start_line=3,
        parameter_count=1,
        body=Block(statements=(Loop(children=(Block(),)),)),
        nested=True,
    )
    return _method(
        _if(Block()),
        OtherNode(children=(callback,)),
        _if(),
        name="Outer",
    )


def test_cc_015_nested_callables_are_measured_separately_by_default() -> None:
    measured = ComplexityVisitor().measure(OtherNode(children=(_outer_with_lambda(),)))

    assert [(m.declaration.name, m.cyclomatic_complexity, m.nesting_depth) for m in measured] == [
        ("Outer", 3, 1),
        ("<lambda>", 2, 1),
    ]


def test_cc_016_nested_callables_fold_into_enclosing_method_when_flattened() -> None:
    measured = _measure_one(_outer_with_lambda(), nested_callables="flatten")

    assert measured.cyclomatic_complexity == 4
    assert measured.nesting_depth == 2


def test_cc_017_callables_outside_methods_produce_no_records() -> None:
    initializer = MethodDeclaration(
        name="<lambda>",
        start_line=1,
        body=Block(statements=(_if(),)),
        nested=True,
    )

    measured = ComplexityVisitor().measure(OtherNode(children=(initializer,)))

    assert measured == []


def test_cc_018_missing_children_are_treated_as_empty() -> None:
    method = _method(
        Loop(),
        Conditional(),
        TryStatement(catches=(CatchClause(),)),
        BinaryOperator(operator="&&"),
    )

    measured = _measure_one(method)

    assert measured.cyclomatic_complexity == 1 + 1 + 1 + 1 + 1
    assert measured.nesting_depth == 0


def test_cc_019_deep_nesting_does_not_exhaust_the_call_stack() -> None:
    node = Block()
    for _ in range(4999):
        node = Block(statements=(node,))

    measured = _measure_one(_method(node))

    assert measured.nesting_depth == 5000


def test_cc_020_expression_bodied_method_counts_logical_operators() -> None:
    method = MethodDeclaration(
        name="IsValid",
        start_line=1,
        body=OtherNode(
            children=(BinaryOperator(operator="||", left=OtherNode(), right=OtherNode()),)
        ),
    )

    measured = _measure_one(method)

    assert measured.cyclomatic_complexity == 2
    assert measured.nesting_depth == 0
