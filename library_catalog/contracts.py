"""Data each page template expects to receive."""

from typing import Dict, List, Tuple

PAGE_CONTRACTS: Dict[str, Tuple[str, ...]] = {
    'index.html': ('title', 'book_count', 'book_instance_count', 'book_instance_available_count',
                   'author_count', 'genre_count'),

    'author_list.html': ('title', 'author_list'),
    'author_detail.html': ('title', 'author', 'author_books'),
    'author_form.html': ('title', 'author'),
    'author_delete.html': ('title', 'author', 'author_books', 'can_delete'),

    'genre_list.html': ('title', 'genre_list'),
    'genre_detail.html': ('title', 'genre', 'genre_books'),
    'genre_form.html': ('title', 'genre'),
    'genre_delete.html': ('title', 'genre', 'genre_books', 'can_delete'),

    'book_list.html': ('title', 'book_list'),
    'book_detail.html': ('title', 'book', 'book_instances'),
    'book_form.html': ('title', 'book', 'authors', 'genres', 'selected_author', 'selected_genres'),
    'book_delete.html': ('title', 'book', 'can_delete'),

    'bookinstance_list.html': ('title', 'bookinstance_list'),
    'bookinstance_detail.html': ('title', 'bookinstance'),
    'bookinstance_form.html': ('title', 'bookinstance', 'book_list', 'status_choices', 'selected_book'),
    'bookinstance_delete.html': ('title', 'bookinstance', 'can_delete'),
}


def missing_keys(template: str, data: Dict) -> List[str]:
    try:
        required = PAGE_CONTRACTS[template]
    except KeyError:
        raise KeyError(f"No contract declared for {template}") from None
    return [key for key in required if key not in data]
