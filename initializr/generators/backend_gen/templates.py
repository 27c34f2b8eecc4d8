"""Jinja2 sources for the registry-backed backend roles.

Keys follow ``role`` or ``role/variant``. Partials under ``partials/`` are only
reached through ``{% include %}`` and share the caller's context.
"""
from typing import Dict

MODULE = """module {{ module }}

go {{ config.language_version }}
{% if requires %}

require (
{% for req in requires %}
	{{ req.path }} {{ req.version }}
{% endfor %}
)
{% endif %}
"""

PARTIAL_IMPORTS = """	"{{ module }}/internal/config"
	"{{ module }}/internal/handler"
{% if hasFeature('logging') %}
	"{{ module }}/internal/logger"
{% endif %}
	"{{ module }}/internal/service"
{% for driver in drivers | sort(attribute="id") %}
	{{ driver.alias }} "{{ module }}/internal/storage/{{ driver.id }}"
{% endfor %}
"""

PARTIAL_BOOTSTRAP = """	cfg := config.Load()
{% if hasFeature('logging') %}
	logger.Init(cfg.LogLevel)
{% endif %}

	ctx := context.Background()
{% for store in stores %}

	{{ store.var }}, err := {{ store.alias }}.Open{{ store.label }}(ctx, cfg.Database.{{ store.field }})
	if err != nil {
		log.Fatalf("open {{ store.database }}: %v", err)
	}
	defer {{ store.var }}.Close()
	if err := {{ store.var }}.Migrate(ctx); err != nil {
		log.Fatalf("migrate {{ store.database }}: %v", err)
	}
{% endfor %}

{% if repo_store %}
	svc := service.New({{ repo_store.var }})
{% else %}
	svc := service.New(service.NewMemoryRepository())
{% endif %}
	h := handler.New(svc)
"""

PARTIAL_SIGNALS = """	stop, cancel := signal.NotifyContext(ctx, os.Interrupt, syscall.SIGTERM)
	defer cancel()
	<-stop.Done()
	log.Println("shutting down")

	shutdownCtx, cancelShutdown := context.WithTimeout(context.Background(), 10*time.Second)
	defer cancelShutdown()
"""

PARTIAL_SERVE = """
	srv := &http.Server{
		Addr:              ":" + cfg.Port,
		Handler:           router,
		ReadHeaderTimeout: 5 * time.Second,
	}

	go func() {
		log.Printf("{{ module }} listening on :%s", cfg.Port)
		if err := srv.ListenAndServe(); err != nil && !errors.Is(err, http.ErrServerClosed) {
			log.Fatalf("listen: %v", err)
		}
	}()

{% include "partials/signals" %}
	if err := srv.Shutdown(shutdownCtx); err != nil {
		log.Printf("shutdown: %v", err)
	}
"""

MAIN_GIN = """package main

import (
	"context"
	"errors"
	"log"
	"net/http"
	"os"
	"os/signal"
	"syscall"
	"time"

	"github.com/gin-gonic/gin"

{% include "partials/imports" %}
)

func main() {
{% include "partials/bootstrap" %}

	router := gin.New()
	router.Use(gin.Logger(), gin.Recovery())
	h.Register(router)
{% include "partials/serve" %}
}
"""

MAIN_ECHO = """package main

import (
	"context"
	"errors"
	"log"
	"net/http"
	"os"
	"os/signal"
	"syscall"
	"time"

	"github.com/labstack/echo/v4"
	"github.com/labstack/echo/v4/middleware"

{% include "partials/imports" %}
)

func main() {
{% include "partials/bootstrap" %}

	e := echo.New()
	e.HideBanner = true
	e.Use(middleware.Logger(), middleware.Recover())
	h.Register(e)

	go func() {
		if err := e.Start(":" + cfg.Port); err != nil && !errors.Is(err, http.ErrServerClosed) {
			log.Fatalf("listen: %v", err)
		}
	}()

{% include "partials/signals" %}
	if err := e.Shutdown(shutdownCtx); err != nil {
		log.Printf("shutdown: %v", err)
	}
}
"""

MAIN_FIBER = """package main

import (
	"context"
	"log"
	"os"
	"os/signal"
	"syscall"
	"time"

	"github.com/gofiber/fiber/v2"
	"github.com/gofiber/fiber/v2/middleware/recover"

{% include "partials/imports" %}
)

func main() {
{% include "partials/bootstrap" %}

	app := fiber.New(fiber.Config{AppName: "{{ module }}"})
	app.Use(recover.New())
	h.Register(app)

	go func() {
		if err := app.Listen(":" + cfg.Port); err != nil {
			log.Fatalf("listen: %v", err)
		}
	}()

{% include "partials/signals" %}
	if err := app.ShutdownWithContext(shutdownCtx); err != nil {
		log.Printf("shutdown: %v", err)
	}
}
"""

MAIN_CHI = """package main

import (
	"context"
	"errors"
	"log"
	"net/http"
	"os"
	"os/signal"
	"syscall"
	"time"

	"github.com/go-chi/chi/v5"
	"github.com/go-chi/chi/v5/middleware"

{% include "partials/imports" %}
)

func main() {
{% include "partials/bootstrap" %}

	router := chi.NewRouter()
	router.Use(middleware.RequestID, middleware.Logger, middleware.Recoverer)
	h.Register(router)
{% include "partials/serve" %}
}
"""

MAIN_NET_HTTP = """package main

import (
	"context"
	"errors"
	"log"
	"net/http"
	"os"
	"os/signal"
	"syscall"
	"time"

{% include "partials/imports" %}
)

func main() {
{% include "partials/bootstrap" %}

	router := http.NewServeMux()
	h.Register(router)
{% include "partials/serve" %}
}
"""

CONFIG = """package config

import "os"

// DatabaseConfig holds one connection string per configured store.
{% if databases %}
type DatabaseConfig struct {
{% for store in databases %}
	{{ pad(store.field, field_width) }} string
{% endfor %}
}
{% else %}
type DatabaseConfig struct{}
{% endif %}

type Config struct {
	Env      string
	Port     string
	LogLevel string
	Database DatabaseConfig
}

// Load reads configuration from the environment, falling back to local defaults.
func Load() Config {
	return Config{
		Env:      getEnv("APP_ENV", "development"),
		Port:     getEnv("PORT", "8080"),
		LogLevel: getEnv("LOG_LEVEL", "info"),
{% if databases %}
		Database: DatabaseConfig{
{% for store in databases %}
			{{ pad(store.field ~ ":", field_width + 1) }} getEnv("{{ store.env }}", "{{ store.dsn }}"),
{% endfor %}
		},
{% else %}
		Database: DatabaseConfig{},
{% endif %}
	}
}

func getEnv(key, fallback string) string {
	if value, ok := os.LookupEnv(key); ok && value != "" {
		return value
	}
	return fallback
}
"""

README = """# {{ toTitle(config.project_name) }}

{% if config.is_frontend %}
{% set fe = config.frontend %}
A {{ fe.framework.name }} application written in {{ fe.language.name }}, built with {{ fe.build_tool.name }}.

## Getting started

```bash
npm install
{% if fe.build_tool.id == "angular-cli" %}
npm start
{% else %}
npm run dev
{% endif %}
```

## Scripts

- `npm run build` builds the production bundle
{% if fe.linter.id == "eslint" %}
- `npm run lint` runs ESLint
{% endif %}
{% if hasFeature('prettier') %}
- `npm run format` formats the sources with Prettier
{% endif %}
{% if hasFeature('vitest') %}
- `npm test` runs the Vitest suite
{% endif %}
{% if fe.features %}

## Features

{% for feature in fe.features %}
- {{ feature.name }}{% if feature.description %}: {{ feature.description }}{% endif %}

{% endfor %}
{% endif %}
{% if fe.custom_packages %}

## Extra packages

{% for package in fe.custom_packages %}
- `{{ package }}`
{% endfor %}
{% endif %}
{% else %}
A Go {{ config.language_version }} service built on {{ config.http_package.name }}.

## Getting started

```bash
go mod tidy
go run ./cmd/{{ config.project_name }}
```

The server listens on `$PORT` (default `8080`) and exposes:

- `GET /health`
- `GET /api/v1/users`
- `POST /api/v1/users`
- `GET /api/v1/users/{id}`
- `DELETE /api/v1/users/{id}`

## Layout

- `cmd/{{ config.project_name }}/` entry point
- `internal/config/` environment configuration
- `internal/domain/` domain model
- `internal/service/` business logic and the repository interface
- `internal/handler/` HTTP handlers
{% for driver in drivers %}
- `internal/storage/{{ driver.id }}/` storage layer using {{ driver.name }}
{% endfor %}
{% if hasFeature('logging') %}
- `internal/logger/` structured logging
{% endif %}
{% if hasFeature('testing') %}
- `internal/testutil/` test helpers
{% endif %}
{% if config.databases %}

## Databases

| Store | Driver | Environment variable |
|---|---|---|
{% for store in databases %}
| {{ store.name }} | {{ store.driver_name or "not configured" }} | `{{ store.env }}` |
{% endfor %}
{% endif %}
{% if config.features %}

## Features

{% for feature in config.features %}
- {{ feature.name }}{% if feature.description %}: {{ feature.description }}{% endif %}

{% endfor %}
{% endif %}
{% if hasFeature('docker') %}

## Docker

```bash
docker compose up --build
```
{% endif %}
{% if hasFeature('makefile') %}

## Make targets

`make run`, `make build`, `make test`{% if hasFeature('air') %}, `make dev`{% endif %}

{% endif %}
{% endif %}
"""

STORAGE_GORM = """package {{ package }}

import (
	"context"
	"errors"
	"fmt"

{% for store in databases | sort(attribute="database") %}
	"gorm.io/driver/{{ store.database }}"
{% endfor %}
	"gorm.io/gorm"

	"{{ module }}/internal/domain"
)

// Storage persists users through GORM.
type Storage struct {
	db *gorm.DB
}
{% for store in databases %}

// Open{{ store.label }} connects to {{ store.name }}.
func Open{{ store.label }}(ctx context.Context, dsn string) (*Storage, error) {
	return open(ctx, {{ store.database }}.Open(dsn))
}
{% endfor %}

func open(ctx context.Context, dialector gorm.Dialector) (*Storage, error) {
	db, err := gorm.Open(dialector, &gorm.Config{})
	if err != nil {
		return nil, fmt.Errorf("gorm open: %w", err)
	}
	s := &Storage{db: db}
	if err := s.Health(ctx); err != nil {
		return nil, err
	}
	return s, nil
}

func (s *Storage) Close() error {
	sqlDB, err := s.db.DB()
	if err != nil {
		return err
	}
	return sqlDB.Close()
}

func (s *Storage) Migrate(ctx context.Context) error {
	return s.db.WithContext(ctx).AutoMigrate(&domain.User{})
}

func (s *Storage) Health(ctx context.Context) error {
	sqlDB, err := s.db.DB()
	if err != nil {
		return err
	}
	return sqlDB.PingContext(ctx)
}

func (s *Storage) CreateUser(ctx context.Context, user *domain.User) error {
	return s.db.WithContext(ctx).Create(user).Error
}

func (s *Storage) GetUserByID(ctx context.Context, id uint) (*domain.User, error) {
	var user domain.User
	err := s.db.WithContext(ctx).First(&user, id).Error
	if errors.Is(err, gorm.ErrRecordNotFound) {
		return nil, domain.ErrNotFound
	}
	if err != nil {
		return nil, err
	}
	return &user, nil
}

func (s *Storage) ListUsers(ctx context.Context, limit, offset int) ([]domain.User, error) {
	var users []domain.User
	err := s.db.WithContext(ctx).Order("id").Limit(limit).Offset(offset).Find(&users).Error
	return users, err
}

func (s *Storage) DeleteUser(ctx context.Context, id uint) error {
	result := s.db.WithContext(ctx).Delete(&domain.User{}, id)
	if result.Error != nil {
		return result.Error
	}
	if result.RowsAffected == 0 {
		return domain.ErrNotFound
	}
	return nil
}
"""

PARTIAL_SQL_SCHEMA = """{% set ddl_stores = databases | selectattr("ddl") | list %}
{% if ddl_stores %}
var schema = map[string]string{
{% for store in ddl_stores %}
	"{{ store.dialect }}": `{{ store.ddl }}`,
{% endfor %}
}
{% else %}
var schema = map[string]string{}
{% endif %}
"""

STORAGE_SQLX = """package {{ package }}

import (
	"context"
	"database/sql"
	"errors"
	"fmt"

{% for path in ((databases | map(attribute="sql_import") | select | list) + ["github.com/jmoiron/sqlx"]) | unique | sort %}
{% if path == "github.com/jmoiron/sqlx" %}
	"{{ path }}"
{% else %}
	_ "{{ path }}"
{% endif %}
{% endfor %}

	"{{ module }}/internal/domain"
)

// Storage persists users through sqlx.
type Storage struct {
	db      *sqlx.DB
	dialect string
}

{% include "partials/sql-schema" %}
{% for store in databases %}

// Open{{ store.label }} connects to {{ store.name }}.
func Open{{ store.label }}(ctx context.Context, dsn string) (*Storage, error) {
	db, err := sqlx.ConnectContext(ctx, "{{ store.dialect }}", dsn)
	if err != nil {
		return nil, fmt.Errorf("connect {{ store.database }}: %w", err)
	}
	return &Storage{db: db, dialect: "{{ store.dialect }}"}, nil
}
{% endfor %}

func (s *Storage) Close() error {
	return s.db.Close()
}

func (s *Storage) Migrate(ctx context.Context) error {
	_, err := s.db.ExecContext(ctx, schema[s.dialect])
	return err
}

func (s *Storage) Health(ctx context.Context) error {
	return s.db.PingContext(ctx)
}

func (s *Storage) CreateUser(ctx context.Context, user *domain.User) error {
	if s.dialect == "postgres" {
		query := `INSERT INTO users (name, email, created_at, updated_at) VALUES ($1, $2, $3, $4) RETURNING id`
		return s.db.QueryRowxContext(ctx, query, user.Name, user.Email, user.CreatedAt, user.UpdatedAt).Scan(&user.ID)
	}
	query := `INSERT INTO users (name, email, created_at, updated_at) VALUES (?, ?, ?, ?)`
	result, err := s.db.ExecContext(ctx, query, user.Name, user.Email, user.CreatedAt, user.UpdatedAt)
	if err != nil {
		return err
	}
	id, err := result.LastInsertId()
	if err != nil {
		return err
	}
	user.ID = uint(id)
	return nil
}

func (s *Storage) GetUserByID(ctx context.Context, id uint) (*domain.User, error) {
	var user domain.User
	query := s.db.Rebind(`SELECT id, name, email, created_at, updated_at FROM users WHERE id = ?`)
	err := s.db.GetContext(ctx, &user, query, id)
	if errors.Is(err, sql.ErrNoRows) {
		return nil, domain.ErrNotFound
	}
	if err != nil {
		return nil, err
	}
	return &user, nil
}

func (s *Storage) ListUsers(ctx context.Context, limit, offset int) ([]domain.User, error) {
	users := []domain.User{}
	query := s.db.Rebind(`SELECT id, name, email, created_at, updated_at FROM users ORDER BY id LIMIT ? OFFSET ?`)
	err := s.db.SelectContext(ctx, &users, query, limit, offset)
	return users, err
}

func (s *Storage) DeleteUser(ctx context.Context, id uint) error {
	result, err := s.db.ExecContext(ctx, s.db.Rebind(`DELETE FROM users WHERE id = ?`), id)
	if err != nil {
		return err
	}
	affected, err := result.RowsAffected()
	if err != nil {
		return err
	}
	if affected == 0 {
		return domain.ErrNotFound
	}
	return nil
}
"""

# Shared by the ent and database/sql storage layers, which both scan rows by hand.
PARTIAL_SQL_CRUD = """
func (s *Storage) rebind(query string) string {
	if s.dialect != "postgres" {
		return query
	}
	var b strings.Builder
	n := 0
	for _, r := range query {
		if r == '?' {
			n++
			fmt.Fprintf(&b, "$%d", n)
			continue
		}
		b.WriteRune(r)
	}
	return b.String()
}

func (s *Storage) CreateUser(ctx context.Context, user *domain.User) error {
	if s.dialect == "postgres" {
		query := `INSERT INTO users (name, email, created_at, updated_at) VALUES ($1, $2, $3, $4) RETURNING id`
		return s.db.QueryRowContext(ctx, query, user.Name, user.Email, user.CreatedAt, user.UpdatedAt).Scan(&user.ID)
	}
	query := `INSERT INTO users (name, email, created_at, updated_at) VALUES (?, ?, ?, ?)`
	result, err := s.db.ExecContext(ctx, query, user.Name, user.Email, user.CreatedAt, user.UpdatedAt)
	if err != nil {
		return err
	}
	id, err := result.LastInsertId()
	if err != nil {
		return err
	}
	user.ID = uint(id)
	return nil
}

func (s *Storage) GetUserByID(ctx context.Context, id uint) (*domain.User, error) {
	var user domain.User
	query := s.rebind(`SELECT id, name, email, created_at, updated_at FROM users WHERE id = ?`)
	row := s.db.QueryRowContext(ctx, query, id)
	err := row.Scan(&user.ID, &user.Name, &user.Email, &user.CreatedAt, &user.UpdatedAt)
	if errors.Is(err, sql.ErrNoRows) {
		return nil, domain.ErrNotFound
	}
	if err != nil {
		return nil, err
	}
	return &user, nil
}

func (s *Storage) ListUsers(ctx context.Context, limit, offset int) ([]domain.User, error) {
	query := s.rebind(`SELECT id, name, email, created_at, updated_at FROM users ORDER BY id LIMIT ? OFFSET ?`)
	rows, err := s.db.QueryContext(ctx, query, limit, offset)
	if err != nil {
		return nil, err
	}
	defer rows.Close()

	users := []domain.User{}
	for rows.Next() {
		var user domain.User
		if err := rows.Scan(&user.ID, &user.Name, &user.Email, &user.CreatedAt, &user.UpdatedAt); err != nil {
			return nil, err
		}
		users = append(users, user)
	}
	return users, rows.Err()
}

func (s *Storage) DeleteUser(ctx context.Context, id uint) error {
	result, err := s.db.ExecContext(ctx, s.rebind(`DELETE FROM users WHERE id = ?`), id)
	if err != nil {
		return err
	}
	affected, err := result.RowsAffected()
	if err != nil {
		return err
	}
	if affected == 0 {
		return domain.ErrNotFound
	}
	return nil
}
"""

STORAGE_ENT = """package {{ package }}

import (
	"context"
	"database/sql"
	"errors"
	"fmt"
	"strings"

	entsql "entgo.io/ent/dialect/sql"
{% for sql_import in databases | map(attribute="sql_import") | select | unique | sort %}
	_ "{{ sql_import }}"
{% endfor %}

	"{{ module }}/internal/domain"
)

// Storage talks to the database through ent's SQL driver. Add schemas under
// ./ent and run `go generate ./ent` to switch the queries below to the
// generated client.
type Storage struct {
	driver  *entsql.Driver
	db      *sql.DB
	dialect string
}

{% include "partials/sql-schema" %}
{% for store in databases %}

// Open{{ store.label }} connects to {{ store.name }}.
func Open{{ store.label }}(ctx context.Context, dsn string) (*Storage, error) {
	driver, err := entsql.Open("{{ store.dialect }}", dsn)
	if err != nil {
		return nil, fmt.Errorf("open {{ store.database }}: %w", err)
	}
	s := &Storage{driver: driver, db: driver.DB(), dialect: "{{ store.dialect }}"}
	if err := s.Health(ctx); err != nil {
		return nil, err
	}
	return s, nil
}
{% endfor %}

func (s *Storage) Close() error {
	return s.driver.Close()
}

func (s *Storage) Migrate(ctx context.Context) error {
	_, err := s.db.ExecContext(ctx, schema[s.dialect])
	return err
}

func (s *Storage) Health(ctx context.Context) error {
	return s.db.PingContext(ctx)
}
{% include "partials/sql-crud" %}
"""

STORAGE_DATABASE_SQL = """package {{ package }}

import (
	"context"
	"database/sql"
	"errors"
	"fmt"
	"strings"

{% if bigquery %}
	"cloud.google.com/go/bigquery"
{% endif %}
{% for sql_import in databases | map(attribute="sql_import") | select | unique | sort %}
	_ "{{ sql_import }}"
{% endfor %}

	"{{ module }}/internal/domain"
)

// Storage persists users with the standard library's database/sql.
type Storage struct {
	db      *sql.DB
{% if bigquery %}
	bq      *bigquery.Client
{% endif %}
	dialect string
}

{% include "partials/sql-schema" %}
{% for store in databases %}
{% if store.database == "bigquery" %}

// OpenBigQuery creates a BigQuery client for the given project ID.
func OpenBigQuery(ctx context.Context, projectID string) (*Storage, error) {
	client, err := bigquery.NewClient(ctx, projectID)
	if err != nil {
		return nil, fmt.Errorf("bigquery client: %w", err)
	}
	return &Storage{bq: client, dialect: "bigquery"}, nil
}
{% else %}

// Open{{ store.label }} connects to {{ store.name }}.
func Open{{ store.label }}(ctx context.Context, dsn string) (*Storage, error) {
	db, err := sql.Open("{{ store.dialect }}", dsn)
	if err != nil {
		return nil, fmt.Errorf("open {{ store.database }}: %w", err)
	}
	if err := db.PingContext(ctx); err != nil {
		db.Close()
		return nil, fmt.Errorf("ping {{ store.database }}: %w", err)
	}
	return &Storage{db: db, dialect: "{{ store.dialect }}"}, nil
}
{% endif %}
{% endfor %}

func (s *Storage) Close() error {
{% if bigquery %}
	if s.bq != nil {
		return s.bq.Close()
	}
{% endif %}
	return s.db.Close()
}

func (s *Storage) Migrate(ctx context.Context) error {
{% if bigquery %}
	if s.bq != nil {
		// Datasets and tables are provisioned outside the service.
		return nil
	}
{% endif %}
	_, err := s.db.ExecContext(ctx, schema[s.dialect])
	return err
}

func (s *Storage) Health(ctx context.Context) error {
{% if bigquery %}
	if s.bq != nil {
		_, err := s.bq.Query("SELECT 1").Read(ctx)
		return err
	}
{% endif %}
	return s.db.PingContext(ctx)
}
{% include "partials/sql-crud" %}
"""

STORAGE_MONGO = """package {{ package }}

import (
	"context"
	"errors"
	"fmt"

	"go.mongodb.org/mongo-driver/bson"
	"go.mongodb.org/mongo-driver/mongo"
	"go.mongodb.org/mongo-driver/mongo/options"

	"{{ module }}/internal/domain"
)

const databaseName = "{{ database_name }}"

// Storage persists users in MongoDB collections.
type Storage struct {
	client   *mongo.Client
	users    *mongo.Collection
	counters *mongo.Collection
}

// OpenMongoDB connects to the MongoDB deployment at uri.
func OpenMongoDB(ctx context.Context, uri string) (*Storage, error) {
	client, err := mongo.Connect(ctx, options.Client().ApplyURI(uri))
	if err != nil {
		return nil, fmt.Errorf("connect mongodb: %w", err)
	}
	db := client.Database(databaseName)
	s := &Storage{client: client, users: db.Collection("users"), counters: db.Collection("counters")}
	if err := s.Health(ctx); err != nil {
		return nil, err
	}
	return s, nil
}

func (s *Storage) Close() error {
	return s.client.Disconnect(context.Background())
}

func (s *Storage) Migrate(ctx context.Context) error {
	_, err := s.users.Indexes().CreateOne(ctx, mongo.IndexModel{
		Keys:    bson.D{{ '{{' }}Key: "email", Value: 1{{ '}}' }},
		Options: options.Index().SetUnique(true),
	})
	return err
}

func (s *Storage) Health(ctx context.Context) error {
	return s.client.Ping(ctx, nil)
}

func (s *Storage) nextID(ctx context.Context) (uint, error) {
	var counter struct {
		Seq uint `bson:"seq"`
	}
	err := s.counters.FindOneAndUpdate(ctx,
		bson.M{"_id": "users"},
		bson.M{"$inc": bson.M{"seq": 1}},
		options.FindOneAndUpdate().SetUpsert(true).SetReturnDocument(options.After),
	).Decode(&counter)
	return counter.Seq, err
}

func (s *Storage) CreateUser(ctx context.Context, user *domain.User) error {
	id, err := s.nextID(ctx)
	if err != nil {
		return err
	}
	user.ID = id
	_, err = s.users.InsertOne(ctx, user)
	return err
}

func (s *Storage) GetUserByID(ctx context.Context, id uint) (*domain.User, error) {
	var user domain.User
	err := s.users.FindOne(ctx, bson.M{"_id": id}).Decode(&user)
	if errors.Is(err, mongo.ErrNoDocuments) {
		return nil, domain.ErrNotFound
	}
	if err != nil {
		return nil, err
	}
	return &user, nil
}

func (s *Storage) ListUsers(ctx context.Context, limit, offset int) ([]domain.User, error) {
	opts := options.Find().SetSort(bson.M{"_id": 1}).SetLimit(int64(limit)).SetSkip(int64(offset))
	cursor, err := s.users.Find(ctx, bson.M{}, opts)
	if err != nil {
		return nil, err
	}
	users := []domain.User{}
	if err := cursor.All(ctx, &users); err != nil {
		return nil, err
	}
	return users, nil
}

func (s *Storage) DeleteUser(ctx context.Context, id uint) error {
	result, err := s.users.DeleteOne(ctx, bson.M{"_id": id})
	if err != nil {
		return err
	}
	if result.DeletedCount == 0 {
		return domain.ErrNotFound
	}
	return nil
}
"""

STORAGE_REDIS = """package {{ package }}

import (
	"context"
	"encoding/json"
	"errors"
	"fmt"

	"github.com/redis/go-redis/v9"

	"{{ module }}/internal/domain"
)

const keyPrefix = "{{ key_prefix }}"

// Storage keeps users as JSON documents indexed by a sorted set.
type Storage struct {
	client *redis.Client
}

// OpenRedis connects to the Redis server at addr.
func OpenRedis(ctx context.Context, addr string) (*Storage, error) {
	client := redis.NewClient(&redis.Options{Addr: addr})
	s := &Storage{client: client}
	if err := s.Health(ctx); err != nil {
		client.Close()
		return nil, fmt.Errorf("connect redis: %w", err)
	}
	return s, nil
}

func (s *Storage) Close() error {
	return s.client.Close()
}

// Migrate is a no-op: Redis keys need no schema.
func (s *Storage) Migrate(ctx context.Context) error {
	return nil
}

func (s *Storage) Health(ctx context.Context) error {
	return s.client.Ping(ctx).Err()
}

func userKey(id uint) string {
	return fmt.Sprintf("%s:users:%d", keyPrefix, id)
}

func (s *Storage) CreateUser(ctx context.Context, user *domain.User) error {
	id, err := s.client.Incr(ctx, keyPrefix+":users:next_id").Result()
	if err != nil {
		return err
	}
	user.ID = uint(id)
	payload, err := json.Marshal(user)
	if err != nil {
		return err
	}
	_, err = s.client.TxPipelined(ctx, func(pipe redis.Pipeliner) error {
		pipe.Set(ctx, userKey(user.ID), payload, 0)
		pipe.ZAdd(ctx, keyPrefix+":users", redis.Z{Score: float64(user.ID), Member: user.ID})
		return nil
	})
	return err
}

func (s *Storage) GetUserByID(ctx context.Context, id uint) (*domain.User, error) {
	payload, err := s.client.Get(ctx, userKey(id)).Bytes()
	if errors.Is(err, redis.Nil) {
		return nil, domain.ErrNotFound
	}
	if err != nil {
		return nil, err
	}
	var user domain.User
	if err := json.Unmarshal(payload, &user); err != nil {
		return nil, err
	}
	return &user, nil
}

func (s *Storage) ListUsers(ctx context.Context, limit, offset int) ([]domain.User, error) {
	ids, err := s.client.ZRange(ctx, keyPrefix+":users", int64(offset), int64(offset+limit-1)).Result()
	if err != nil {
		return nil, err
	}
	users := []domain.User{}
	for _, raw := range ids {
		var id uint
		if _, err := fmt.Sscan(raw, &id); err != nil {
			return nil, err
		}
		user, err := s.GetUserByID(ctx, id)
		if errors.Is(err, domain.ErrNotFound) {
			continue
		}
		if err != nil {
			return nil, err
		}
		users = append(users, *user)
	}
	return users, nil
}

func (s *Storage) DeleteUser(ctx context.Context, id uint) error {
	deleted, err := s.client.Del(ctx, userKey(id)).Result()
	if err != nil {
		return err
	}
	if deleted == 0 {
		return domain.ErrNotFound
	}
	return s.client.ZRem(ctx, keyPrefix+":users", id).Err()
}
"""

TEMPLATES: Dict[str, str] = {
    "module": MODULE,
    "config": CONFIG,
    "readme": README,
    "main/gin": MAIN_GIN,
    "main/echo": MAIN_ECHO,
    "main/fiber": MAIN_FIBER,
    "main/chi": MAIN_CHI,
    "main/net-http": MAIN_NET_HTTP,
    "storage/gorm": STORAGE_GORM,
    "storage/sqlx": STORAGE_SQLX,
    "storage/ent": STORAGE_ENT,
    "storage/database-sql": STORAGE_DATABASE_SQL,
    "storage/mongo-driver": STORAGE_MONGO,
    "storage/redis-client": STORAGE_REDIS,
    "partials/imports": PARTIAL_IMPORTS,
    "partials/bootstrap": PARTIAL_BOOTSTRAP,
    "partials/signals": PARTIAL_SIGNALS,
    "partials/serve": PARTIAL_SERVE,
    "partials/sql-schema": PARTIAL_SQL_SCHEMA,
    "partials/sql-crud": PARTIAL_SQL_CRUD,
}
