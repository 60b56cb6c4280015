"""Builders for the SQL statements used by the repositories.

The returned statements use ``?`` placeholders for values; limits and
offsets given as integers are written into the text directly.
"""

from __future__ import annotations

from collections.abc import Sequence

_SORT_ORDERS = ("ASC", "DESC")


def _qualify(table: str, columns: Sequence[str]) -> list[str]:
    return [f"{table}.{column}" for column in columns]


def _limit_offset(limit: int, offset: int) -> str:
    clause = ""
    if limit > 0:
        clause += f" LIMIT {limit}"
    if offset > 0:
        clause += f" OFFSET {offset}"
    return clause


def _select_head(table_name: str, first: list[str], second: list[str]) -> str:
    first_names = ", ".join(first)
    if second:
        return f"SELECT {first_names}, {', '.join(second)} FROM {table_name}"
    return f"SELECT {first_names} FROM {table_name}"


def select_inner_join_query(
    table_name: str,
    join_table: str,
    join_condition: str,
    condition: str,
    first_table_columns: Sequence[str],
    second_table_columns: Sequence[str],
) -> str:
    """SELECT with an INNER JOIN and an optional equality filter."""
    query = _select_head(
        table_name,
        _qualify(table_name, first_table_columns),
        _qualify(join_table, second_table_columns),
    )
    if join_table and join_condition:
        query += f" INNER JOIN {join_table} ON {join_condition}"
    elif not join_condition:
        query += f" INNER JOIN {join_table}"
    if condition:
        query += f" WHERE {condition} = ?"
    return query


def select_left_join_query(
    table_name: str,
    join_table: str,
    join_condition: str,
    condition: str,
    first_table_columns: Sequence[str],
    second_table_columns: Sequence[str],
    limit: int,
    offset: int,
) -> str:
    """SELECT with a LEFT JOIN, an optional filter and optional paging."""
    first_names = ", ".join(_qualify(table_name, first_table_columns))
    second_names = ", ".join(_qualify(join_table, second_table_columns))
    query = f"SELECT {first_names}, {second_names} FROM {table_name}"
    if join_table and join_condition:
        query += f" LEFT JOIN {join_table} ON {join_condition}"
    if condition:
        query += f" WHERE {condition} = ?"
    return query + _limit_offset(limit, offset)


def select_query(
    table_name: str, condition1: str, condition2: str, columns: Sequence[str]
) -> str:
    """SELECT with zero, one or two equality filters.

    A second condition without a first one yields an empty string.
    """
    col_names = ", ".join(columns)
    if not condition1 and not condition2:
        return f"SELECT {col_names} FROM {table_name}"
    if condition1 and not condition2:
        return f"SELECT {col_names} FROM {table_name} WHERE {condition1} = ?"
    if condition1 and condition2:
        return (
            f"SELECT {col_names} FROM {table_name} "
            f"WHERE {condition1} = ? AND {condition2} = ?"
        )
    return ""


def delete_query(table_name: str, condition1: str, condition2: str) -> str:
    """DELETE filtered by one or two equality conditions."""
    if not condition2:
        return f"DELETE FROM {table_name} WHERE {condition1} = ?"
    return f"DELETE FROM {table_name} WHERE {condition1} = ? AND {condition2} = ?"


def update_query(
    table_name: str, condition1: str, condition2: str, columns: Sequence[str]
) -> str:
    """UPDATE the given columns, filtered by one or two conditions."""
    set_clause = ", ".join(f"{column} = ?" for column in columns)
    if not condition2:
        return f"UPDATE {table_name} SET {set_clause} WHERE {condition1} = ?"
    return (
        f"UPDATE {table_name} SET {set_clause} "
        f"WHERE {condition1} = ? AND {condition2} = ?"
    )


def insert_query(table_name: str, columns: Sequence[str]) -> str:
    """INSERT with one placeholder per column."""
    col_names = ", ".join(columns)
    placeholders = ", ".join("?" for _ in columns)
    return f"INSERT INTO {table_name} ({col_names}) VALUES ({placeholders})"


def select_count_query(table_name: str, condition: str) -> str:
    """SELECT COUNT(*) with an optional equality filter."""
    query = f"SELECT COUNT(*) FROM {table_name}"
    if condition:
        query += f" WHERE {condition} = ?"
    return query


def select_average_query(table_name: str, column: str, condition: str) -> str:
    """SELECT AVG(column) with an optional equality filter."""
    query = f"SELECT AVG({column}) FROM {table_name}"
    if condition:
        query += f" WHERE {condition} = ?"
    return query


_REQUEST_WITH_PROVIDERS = """
    SELECT
        service_requests.id AS request_id,
        service_requests.householder_id,
        service_requests.householder_name,
        service_requests.householder_address,
        service_requests.service_id,
        service_requests.requested_time,
        service_requests.scheduled_time,
        service_requests.status,
        service_requests.approve_status,
        service_requests.service_name,
        CONCAT(
            '[',
            GROUP_CONCAT(
                JSON_OBJECT(
                    'service_provider_id', service_provider_details.service_provider_id,
                    'name', service_provider_details.name,
                    'contact', service_provider_details.contact,
                    'address', service_provider_details.address,
                    'price', service_provider_details.price,
                    'rating', service_provider_details.rating,
                    'approve', service_provider_details.approve
                )
                SEPARATOR ', '
            ),
            ']'
        ) AS provider_details
    FROM
        service_requests
    LEFT JOIN
        service_provider_details ON service_requests.id = service_provider_details.service_request_id
    WHERE
        service_requests.householder_id = ?
    """


def select_json_data_query(with_status: bool) -> str:
    """A householder's requests with provider details aggregated as JSON."""
    query = _REQUEST_WITH_PROVIDERS
    if with_status:
        query += " AND service_requests.status = ? "
    query += """
    GROUP BY
        service_requests.id
    LIMIT ? OFFSET ?;
    """
    return query


def select_json_data_query_with_approve(sort_order: str) -> str:
    """Like select_json_data_query, filtered on approval and optionally sorted."""
    query = _REQUEST_WITH_PROVIDERS + """
        AND service_requests.approve_status = ?
    GROUP BY
        service_requests.id
    """
    if sort_order in _SORT_ORDERS:
        query += f" ORDER BY service_requests.scheduled_time {sort_order}"
    query += " LIMIT ? OFFSET ?;"
    return query


def view_pending_request_by_provider(service_id: str) -> str:
    """Open requests a provider has not yet responded to."""
    query = """
        SELECT sr.id, sr.householder_id, sr.householder_name, sr.householder_address, sr.service_id, 
               sr.requested_time, sr.scheduled_time, sr.description, sr.status, sr.approve_status, sr.service_name
        FROM service_requests sr
        LEFT JOIN service_provider_details spd 
        ON sr.id = spd.service_request_id AND spd.service_provider_id = ?
        WHERE spd.service_request_id IS NULL AND (sr.status="pending" OR sr.status="accepted")"""
    if service_id:
        query += " AND sr.service_id = ?"
    query += " LIMIT ? OFFSET ?;"
    return query


def select_inner_join_query_paginate(
    table_name: str,
    join_table: str,
    join_condition: str,
    condition: str,
    first_table_columns: Sequence[str],
    second_table_columns: Sequence[str],
    limit: int,
    offset: int,
    sort_column: str,
    sort_order: str,
) -> str:
    """INNER JOIN select with optional filter, ordering and paging."""
    query = _select_head(
        table_name,
        _qualify(table_name, first_table_columns),
        _qualify(join_table, second_table_columns),
    )
    if join_table and join_condition:
        query += f" INNER JOIN {join_table} ON {join_condition}"
    if condition:
        query += f" WHERE {condition} = ?"
    if sort_column and sort_order in _SORT_ORDERS:
        query += f" ORDER BY {sort_column} {sort_order}"
    return query + _limit_offset(limit, offset)


def select_query_with_limit(
    table_name: str,
    condition1: str,
    condition2: str,
    columns: Sequence[str],
    limit: int,
    offset: int,
) -> str:
    """SELECT with up to two filters and optional paging."""
    query = f"SELECT {', '.join(columns)} FROM {table_name}"
    if condition1 and condition2:
        query += f" WHERE {condition1} = ? AND {condition2} = ?"
    elif condition1:
        query += f" WHERE {condition1} = ?"
    return query + _limit_offset(limit, offset)


def count_review_added_query() -> str:
    """Count reviews a householder left for a provider's service."""
    return (
        "SELECT COUNT(*) FROM reviews WHERE provider_id = ? "
        "AND service_id = ? AND householder_id = ?"
    )