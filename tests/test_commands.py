import pytest

from mercass.database.core.commands import Batch, Procedure, QueryResult, Statement, ViewQuery


def test_procedure_binds_every_parameter_by_name():
    sql, values = Procedure("sp_addSubs", {"userId": 7, "subId": 2}).compile()

    assert sql == "EXEC sp_addSubs @userId = ?, @subId = ?"
    assert values == [7, 2]


def test_positional_procedure_and_no_parameters():
    assert Procedure("sp_getSellerDetailInfo", {"UserId": 3}, positional=True).compile() == (
        "EXEC sp_getSellerDetailInfo ?", [3])
    assert Procedure("sp_listAll").compile() == ("EXEC sp_listAll", [])


@pytest.mark.parametrize("name", ["sp_x; DROP TABLE Users", "v_allUsers--", "1abc", ""])
def test_identifiers_are_validated(name):
    with pytest.raises(ValueError):
        Procedure(name)
    with pytest.raises(ValueError):
        ViewQuery("v_allUsers", {name: 1})


def test_caller_values_never_reach_the_sql_text():
    code = "x' OR '1'='1"

    sql, values = ViewQuery("v_activeProducts", {"categoryCode": code}).compile()

    assert code not in sql
    assert values == [code]


def test_view_query_membership_and_order():
    sql, values = ViewQuery("v_forum", {"categoryId": [1, 2, 3]}, order_by=("createDate DESC",)).compile()

    assert sql == "SELECT * FROM v_forum WHERE categoryId IN (?, ?, ?) ORDER BY createDate DESC"
    assert values == [1, 2, 3]


def test_empty_membership_matches_nothing():
    sql, values = ViewQuery("v_forum", {"categoryId": []}).compile()

    assert sql == "SELECT * FROM v_forum WHERE 1 = 0"
    assert values == []


def test_invalid_sort_direction():
    with pytest.raises(ValueError):
        ViewQuery("v_forum", order_by=("Id; DELETE",))


def test_statement_placeholders_must_match_values():
    with pytest.raises(ValueError):
        Statement("UPDATE Chat SET isread = 1 WHERE Id = ?", ())


def test_batch_joins_statements_and_values():
    batch = Batch((ViewQuery("v_allCategories"), Procedure("sp_getDraftFormPost", {"UserId": 4}, positional=True)))

    sql, values = batch.compile()

    assert sql == "SELECT * FROM v_allCategories;\nEXEC sp_getDraftFormPost ?"
    assert values == [4]


def test_query_result_shape():
    result = QueryResult([[{"Id": 1}], [{"Id": 2}]], [1])

    assert result.first() == {"Id": 1}
    assert result.to_dict() == {
        "recordsets": [[{"Id": 1}], [{"Id": 2}]],
        "recordset": [{"Id": 1}],
        "rowsAffected": [1],
    }
    assert QueryResult().first() is None
